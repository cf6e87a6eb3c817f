from fastapi import APIRouter
from jobboard.controllers import auth_controller
from jobboard.controllers import job_controller
from jobboard.controllers import alumni_controller
from jobboard.controllers import student_controller
from jobboard.controllers import admin_controller
from jobboard.controllers import notification_controller
from jobboard.controllers import messaging_controller
from jobboard.controllers import log_controller


router = APIRouter()


router.include_router(auth_controller.router, prefix="/auth", tags=["Auth"])
router.include_router(job_controller.router, prefix="/job", tags=["Jobs"])
router.include_router(alumni_controller.router, prefix="/alumni", tags=["Alumni"])
router.include_router(student_controller.router, prefix="/student", tags=["Student"])
router.include_router(log_controller.router, prefix="/admin/logs", tags=["Admin"])
router.include_router(admin_controller.router, prefix="/admin", tags=["Admin"])
router.include_router(notification_controller.router, prefix="/notifications", tags=["Notifications"])
router.include_router(messaging_controller.connections_router, prefix="/connections", tags=["Messaging"])
router.include_router(messaging_controller.messages_router, prefix="/messages", tags=["Messaging"])
