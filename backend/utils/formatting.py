from decimal import Decimal, ROUND_HALF_UP

def amount_to_words(n: Decimal) -> str:
    """Spell out a rupee amount in the Indian numbering system (lakh, crore)."""
    if n is None:
        return ""
    n = Decimal(n).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if n < 0:
        return "Minus " + amount_to_words(-n)
    if n == 0:
        return "Zero Only"

    units = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine", "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen"]
    tens = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

    def convert(num: int) -> str:
        if num < 20:
            return units[num]
        elif num < 100:
            return tens[num // 10] + (" " + units[num % 10] if num % 10 != 0 else "")
        elif num < 1000:
            return units[num // 100] + " Hundred" + (" " + convert(num % 100) if num % 100 != 0 else "")
        elif num < 100000:
            return convert(num // 1000) + " Thousand" + (" " + convert(num % 1000) if num % 1000 != 0 else "")
        elif num < 10000000:
            return convert(num // 100000) + " Lakh" + (" " + convert(num % 100000) if num % 100000 != 0 else "")
        else:
            return convert(num // 10000000) + " Crore" + (" " + convert(num % 10000000) if num % 10000000 != 0 else "")

    integer_part = int(n)
    paise = int((n - integer_part) * 100)

    result = convert(integer_part) if integer_part else "Zero"
    if paise > 0:
        result += " and " + convert(paise) + " Paise"

    return result + " Only"
