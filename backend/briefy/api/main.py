from fastapi import APIRouter

from briefy.api.routes import content, documents, generate, projects, prompts, support_materials, utils

api_router = APIRouter()
api_router.include_router(utils.router)
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(content.router, prefix="/content", tags=["content"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(prompts.router, prefix="/prompts", tags=["prompts"])
api_router.include_router(support_materials.router, prefix="/support-materials", tags=["support-materials"])
api_router.include_router(generate.router, prefix="/generate", tags=["generate"])
