import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from learnlab.core.errors import GenerationFailure
from learnlab.core.log import setup_logging
from learnlab.api.v1.endpoints import literacy, simulation
from learnlab.scheduler import scheduler, setup_scheduler

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown events.
    """
    # Startup
    setup_logging()
    setup_scheduler()
    scheduler.start()

    yield

    # Shutdown
    scheduler.shutdown()

app = FastAPI(title="Learn Lab", lifespan=lifespan)

@app.exception_handler(GenerationFailure)
async def generation_failure_handler(request: Request, exc: GenerationFailure):
    """
    A turn that could not be generated is reported to the caller, who may retry it.
    """
    logging.warning(f"Generation failed ({exc.kind}) for {request.url.path}")
    return JSONResponse(status_code=502, content={"detail": exc.message, "kind": exc.kind})

@app.get("/health")
async def health():
    return {"status": "ok"}

# Include API routers
app.include_router(simulation.router, prefix="/api/v1", tags=["simulation"])
app.include_router(literacy.router, prefix="/api/v1", tags=["literacy"])
