from .user import router as UserRouter
