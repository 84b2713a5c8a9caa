from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from hrportal.core.database import Repository, employee_repository


async def get_owned_or_404(repository: Repository, db: AsyncSession, owner_id: str, id_value: str, label: str):
    """Fetch a row owned by ``owner_id``; rows of other users look missing."""
    db_obj = await repository.get(db, owner_id, id_value)
    if not db_obj:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} {id_value} not found"
        )
    return db_obj


async def ensure_employee(db: AsyncSession, owner_id: str, employee_id: str):
    return await get_owned_or_404(employee_repository, db, owner_id, employee_id, "Employee")
