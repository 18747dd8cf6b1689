from .formatting import amount_to_words

__all__ = ['amount_to_words']
