import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fleetdesk.config import get_settings
from fleetdesk.routes.allocation import router as allocationRouter
from fleetdesk.routes.booking import router as bookingRouter
from fleetdesk.routes.driver import router as driverRouter
from fleetdesk.routes.handover import router as handoverRouter
from fleetdesk.routes.owner import router as ownerRouter
from fleetdesk.routes.reminder import router as reminderRouter
from fleetdesk.routes.vehicle import router as vehicleRouter

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(title=settings.APP_NAME)

# Dashboard runs on a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ownerRouter)
app.include_router(vehicleRouter)
app.include_router(driverRouter)
app.include_router(bookingRouter)
app.include_router(allocationRouter)
app.include_router(reminderRouter)
app.include_router(handoverRouter)

@app.get("/health")
def healthCheck():
    return {
        "status": "OK",
        "service": "fleetdesk-backend"
    }
