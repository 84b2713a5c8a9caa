import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hrportal.api.deps import ensure_employee, get_owned_or_404
from hrportal.core.config import settings
from hrportal.core.database import get_db, project_repository
from hrportal.core.decorators import log_execution_time, log_requests
from hrportal.core.security import get_current_active_user
from hrportal.core.storage import LocalStorage, StorageError, get_storage
from hrportal.models.model import User
from hrportal.schemas.schema import ProjectResponse, ResponseMessage

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/projects",
    tags=["projects"],
    responses={404: {"description": "Not found"}},
)


async def store_files(storage: LocalStorage, owner_id: str, files: Optional[List[UploadFile]]):
    """Upload each file; failures are logged and reported, never fatal.

    Every size is checked before anything is written, so an oversize
    file rejects the whole batch.
    """
    pending = []
    for upload in files or []:
        if not upload.filename:
            continue

        data = await upload.read()
        if len(data) > settings.MAX_UPLOAD_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"{upload.filename} exceeds {settings.MAX_UPLOAD_BYTES} bytes"
            )
        pending.append((upload.filename, data))

    stored, failed = [], []
    for filename, data in pending:
        try:
            stored.append(storage.upload(storage.build_key(owner_id, filename), data))
        except StorageError as e:
            logger.error(f"Error uploading file {filename}: {str(e)}")
            failed.append(filename)
    return stored, failed


@router.get("/", response_model=List[ProjectResponse])
@log_requests
@log_execution_time
async def get_projects(
    request: Request,
    category: Optional[str] = None,
    tag: Optional[str] = None,
    employee_id: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    try:
        filters = {"category": category, "tag": tag, "employee_id": employee_id}
        projects = await project_repository.get_all(db, current_user.id, limit=None, filters=filters)
        return [ProjectResponse.from_model(project) for project in projects]
    except Exception as e:
        logger.error(f"Error fetching projects: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch projects"
        )


@router.post("/", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
@log_requests
@log_execution_time
async def create_project(
    request: Request,
    title: str = Form(..., min_length=1),
    category: str = Form(..., min_length=1),
    tag: str = Form(..., min_length=1),
    employee_id: str = Form(...),
    files: Optional[List[UploadFile]] = File(None),
    db: AsyncSession = Depends(get_db),
    storage: LocalStorage = Depends(get_storage),
    current_user: User = Depends(get_current_active_user)
):
    await ensure_employee(db, current_user.id, employee_id)
    stored, failed = await store_files(storage, current_user.id, files)

    try:
        project = await project_repository.create(db, current_user.id, {
            "title": title,
            "category": category,
            "tag": tag,
            "employee_id": employee_id,
            "file_paths": stored or None,
        })
        return ProjectResponse.from_model(project, failed)
    except Exception as e:
        logger.error(f"Error saving project: {str(e)}")
        for key in stored:
            storage.remove(key)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save project"
        )


@router.get("/{project_id}", response_model=ProjectResponse)
@log_requests
async def get_project(
    request: Request,
    project_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    project = await get_owned_or_404(project_repository, db, current_user.id, project_id, "Project")
    return ProjectResponse.from_model(project)


@router.put("/{project_id}", response_model=ProjectResponse)
@log_requests
@log_execution_time
async def update_project(
    request: Request,
    project_id: str,
    title: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    tag: Optional[str] = Form(None),
    employee_id: Optional[str] = Form(None),
    files: Optional[List[UploadFile]] = File(None),
    db: AsyncSession = Depends(get_db),
    storage: LocalStorage = Depends(get_storage),
    current_user: User = Depends(get_current_active_user)
):
    project = await get_owned_or_404(project_repository, db, current_user.id, project_id, "Project")
    if employee_id:
        await ensure_employee(db, current_user.id, employee_id)

    data = {
        key: value
        for key, value in {"title": title, "category": category, "tag": tag, "employee_id": employee_id}.items()
        if value
    }

    stored, failed = await store_files(storage, current_user.id, files)
    if stored:
        data["file_paths"] = list(project.file_paths or []) + stored

    if not data and not failed:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )

    project = await project_repository.update(db, project, data)
    return ProjectResponse.from_model(project, failed)


@router.get("/{project_id}/files/{file_path:path}")
@log_requests
async def download_project_file(
    request: Request,
    project_id: str,
    file_path: str,
    db: AsyncSession = Depends(get_db),
    storage: LocalStorage = Depends(get_storage),
    current_user: User = Depends(get_current_active_user)
):
    project = await get_owned_or_404(project_repository, db, current_user.id, project_id, "Project")
    if file_path not in (project.file_paths or []):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    try:
        path = storage.path_for(file_path)
    except StorageError as e:
        logger.error(f"Error downloading file: {str(e)}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    return FileResponse(path, filename=file_path.rsplit("/", 1)[-1])


@router.delete("/{project_id}/files/{file_path:path}", response_model=ProjectResponse)
@log_requests
async def delete_project_file(
    request: Request,
    project_id: str,
    file_path: str,
    db: AsyncSession = Depends(get_db),
    storage: LocalStorage = Depends(get_storage),
    current_user: User = Depends(get_current_active_user)
):
    project = await get_owned_or_404(project_repository, db, current_user.id, project_id, "Project")
    remaining = [path for path in project.file_paths or [] if path != file_path]
    if len(remaining) == len(project.file_paths or []):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    storage.remove(file_path)
    project = await project_repository.update(db, project, {"file_paths": remaining or None})
    return ProjectResponse.from_model(project)


@router.delete("/{project_id}", response_model=ResponseMessage)
@log_requests
async def delete_project(
    request: Request,
    project_id: str,
    db: AsyncSession = Depends(get_db),
    storage: LocalStorage = Depends(get_storage),
    current_user: User = Depends(get_current_active_user)
):
    project = await get_owned_or_404(project_repository, db, current_user.id, project_id, "Project")
    file_paths = list(project.file_paths or [])

    await project_repository.delete(db, project)
    for key in file_paths:
        storage.remove(key)
    return ResponseMessage(message="Project deleted successfully")
