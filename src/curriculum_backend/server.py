import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from curriculum_backend.api.api_builder import CrudRouter
from curriculum_backend.interface.courses import CourseInterface
from curriculum_backend.interface.enrollments import EnrollmentInterface
from curriculum_backend.interface.programs import ProgramInterface
from curriculum_backend.logging_config import setup_logging
from curriculum_backend.permissions.core import initialize_permission_handlers
from curriculum_backend.settings import settings

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    initialize_permission_handlers()
    logger.info(f"curriculum backend starting ({settings.DEBUG_MODE}, search index: {settings.SEARCH_INDEX_BACKEND})")

    yield

app = FastAPI(lifespan=lifespan)

origins = [
    "*"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)

CrudRouter(ProgramInterface).register_routes(app)
CrudRouter(CourseInterface).register_routes(app)
CrudRouter(EnrollmentInterface).register_routes(app)
