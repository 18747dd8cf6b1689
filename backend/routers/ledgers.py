from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List
import logging

from database import get_db
from crud import ledgers as crud_ledgers
from schemas.ledgers import (
    Ledger as LedgerSchema,
    LedgerCreate,
    LedgerGroup as LedgerGroupSchema,
    LedgerGroupCreate,
    LedgerGroupNode,
    LedgerGroupUpdate,
)
from utils.auth_utils import get_current_user, get_user_identifier
from utils.tenancy import get_company_id

router = APIRouter(prefix="/ledgers", tags=["Ledgers"])
logger = logging.getLogger("ledgers")


@router.get("/groups", response_model=List[LedgerGroupNode])
def read_ledger_groups(
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    """Ledger groups of the company as a parent/children tree."""
    return crud_ledgers.get_ledger_group_tree(db, company_id)


@router.post("/groups", response_model=LedgerGroupSchema, status_code=status.HTTP_201_CREATED)
def create_ledger_group(
    group: LedgerGroupCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    try:
        db_group = crud_ledgers.create_ledger_group(db, group, company_id, user)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"Ledger group '{group.name}' already exists.")
    logger.info(f"Ledger group '{db_group.name}' created for company {company_id} by {get_user_identifier(user)}")
    return db_group


@router.patch("/groups/{group_id}", response_model=LedgerGroupSchema)
def update_ledger_group(
    group_id: int,
    group: LedgerGroupUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    """Rename a group or move it under another parent."""
    try:
        db_group = crud_ledgers.update_ledger_group(db, group_id, group, company_id, user)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"Ledger group '{group.name}' already exists.")
    if db_group is None:
        raise HTTPException(status_code=404, detail="Ledger group not found")
    logger.info(f"Ledger group {group_id} updated for company {company_id} by {get_user_identifier(user)}")
    return db_group


@router.get("/", response_model=List[LedgerSchema])
def read_ledgers(
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    return crud_ledgers.get_ledgers(db, company_id)


@router.post("/", response_model=LedgerSchema, status_code=status.HTTP_201_CREATED)
def create_ledger(
    ledger: LedgerCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    try:
        db_ledger = crud_ledgers.create_ledger(db, ledger, company_id, user)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"Ledger '{ledger.name}' already exists.")
    logger.info(f"Ledger '{db_ledger.name}' created for company {company_id} by {get_user_identifier(user)}")
    return db_ledger
