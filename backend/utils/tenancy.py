from fastapi import Header, HTTPException

def get_company_id(x_company_id: str = Header(...)) -> int:
    if not x_company_id:
        raise HTTPException(status_code=400, detail="X-Company-ID header is missing")
    try:
        return int(x_company_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="X-Company-ID header must be an integer")
