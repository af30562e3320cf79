import uuid
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from briefy import crud
from briefy.api.deps import CurrentUserId, get_db, get_owned_project
from briefy.models import SupportMaterial, SupportMaterialCreate, SupportMaterialPublic, SupportMaterialUpdate

router = APIRouter()


@router.get("/", response_model=list[SupportMaterialPublic])
def read_support_materials(
    current_user_id: CurrentUserId,
    project_id: uuid.UUID | None = None,
    session: Session = Depends(get_db),
) -> Any:
    """Materials of one project, or the default materials when no project is given."""
    if project_id is not None:
        get_owned_project(session, project_id, current_user_id)
    return crud.list_support_materials(session=session, project_id=project_id)


@router.post("/", response_model=SupportMaterialPublic)
def create_support_material(
    material_in: SupportMaterialCreate,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    if material_in.project_id is not None:
        get_owned_project(session, material_in.project_id, current_user_id)
    return crud.create_support_material(session=session, material_in=material_in)


@router.patch("/{id}", response_model=SupportMaterialPublic)
def update_support_material(
    id: uuid.UUID,
    material_in: SupportMaterialUpdate,
    current_user_id: CurrentUserId,
    session: Session = Depends(get_db),
) -> Any:
    material = session.get(SupportMaterial, id)
    if material is None:
        raise HTTPException(status_code=404, detail="Material de apoio não encontrado")
    if material.project_id is not None:
        get_owned_project(session, material.project_id, current_user_id)
    return crud.apply_update(session=session, db_obj=material, update_in=material_in)
