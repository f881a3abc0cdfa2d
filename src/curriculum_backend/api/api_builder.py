from typing import Annotated, Optional
from aiocache import BaseCache
from fastapi import APIRouter, Depends, FastAPI, Query, Response, status
from sqlalchemy.orm import Session

from curriculum_backend.api.crud import create_db, delete_db, get_id_db, list_db, search_db, update_db
from curriculum_backend.database import get_db
from curriculum_backend.interface.base import EntityInterface
from curriculum_backend.permissions.auth import get_current_principal
from curriculum_backend.permissions.principal import Principal
from curriculum_backend.redis_cache import get_redis_client
from curriculum_backend.search.index import SearchIndex


def search_index_dependency(dto: EntityInterface):
    async def dependency(cache: Annotated[BaseCache, Depends(get_redis_client)]) -> SearchIndex:
        return SearchIndex(cache, dto.endpoint)
    return dependency


class CrudRouter:

    id_type = "id"

    path: str
    dto: EntityInterface

    def __init__(self, dto, endpoint: Optional[str] = None):
        self.dto = dto
        if endpoint == None:
            self.path = self.dto.endpoint
        else:
            self.path = endpoint

        self.router = APIRouter()
        self.get_search_index = search_index_dependency(dto)

    def create(self):
        async def route(permissions: Annotated[Principal, Depends(get_current_principal)], entity: self.dto.create, search_index: Annotated[SearchIndex, Depends(self.get_search_index)], db: Session = Depends(get_db)) -> self.dto.get:
            return await create_db(permissions, db, entity, self.dto, search_index)
        return route

    def update(self):
        async def route(permissions: Annotated[Principal, Depends(get_current_principal)], entity: self.dto.update, search_index: Annotated[SearchIndex, Depends(self.get_search_index)], db: Session = Depends(get_db)) -> self.dto.get:
            return await update_db(permissions, db, entity, self.dto, search_index)
        return route

    def get(self):
        async def route(permissions: Annotated[Principal, Depends(get_current_principal)], id: int, db: Session = Depends(get_db)) -> self.dto.get:
            return await get_id_db(permissions, db, id, self.dto)
        return route

    def list(self):
        async def route(permissions: Annotated[Principal, Depends(get_current_principal)], response: Response, params: self.dto.query = Depends(), db: Session = Depends(get_db)) -> list[self.dto.list]:
            list_result, total = await list_db(permissions, db, params, self.dto)
            response.headers["X-Total-Count"] = str(total)
            return list_result
        return route

    def delete(self):
        async def route(permissions: Annotated[Principal, Depends(get_current_principal)], id: int, search_index: Annotated[SearchIndex, Depends(self.get_search_index)], db: Session = Depends(get_db)):
            return await delete_db(permissions, db, id, self.dto, search_index)
        return route

    def search(self):
        async def route(permissions: Annotated[Principal, Depends(get_current_principal)], query: Annotated[str, Query()], db: Session = Depends(get_db)) -> list[self.dto.list]:
            return await search_db(permissions, db, query, self.dto)
        return route

    def register_routes(self, app: FastAPI):

        scope_name = self.path.replace("/","").replace("_"," ")

        self.router.add_api_route("", self.create(), methods=["POST"],
                    status_code=status.HTTP_201_CREATED, name=f"create {scope_name.capitalize()}")
        self.router.add_api_route("", self.update(), methods=["PUT"],
                    status_code=status.HTTP_200_OK, name=f"update {scope_name.capitalize()}")
        self.router.add_api_route(f"/{{{CrudRouter.id_type}}}", self.get(), methods=["GET"],
                    status_code=status.HTTP_200_OK, name=f"get {scope_name.capitalize()}")
        self.router.add_api_route("", self.list(), methods=["GET"],
                    status_code=status.HTTP_200_OK, name=f"list {scope_name.capitalize()}")
        self.router.add_api_route(f"/{{{CrudRouter.id_type}}}", self.delete(), methods=["DELETE"],
                    status_code=status.HTTP_200_OK, name=f"delete {scope_name.capitalize()}")

        app.include_router(
            self.router,
            prefix=f"/{self.path}",
            tags=[scope_name]
        )

        app.add_api_route(f"/_search/{self.path}", self.search(), methods=["GET"],
                    status_code=status.HTTP_200_OK, name=f"search {scope_name.capitalize()}", tags=[scope_name])

        return self
