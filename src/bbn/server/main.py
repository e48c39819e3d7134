"""
bbn API Server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from bbn.server.routes import inference, networks


logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def log_routes(app: FastAPI):
    routes = []
    for route in app.routes:
        if isinstance(route, APIRoute):
            methods = ", ".join(sorted(route.methods - {"HEAD", "OPTIONS"}))
            routes.append((methods, route.path, route.name))

    routes.sort(key=lambda r: (r[1], r[0]))

    for methods, path, name in routes:
        logger.info("  %-8s %-32s → %s", methods, path, name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_routes(app)
    yield


app = FastAPI(title="bbn API", version=VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(inference.router)
app.include_router(networks.router)


@app.get("/")
async def root():
    return {"name": "bbn API", "version": VERSION}
