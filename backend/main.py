"""
Development entry point: python backend/main.py
"""
import uvicorn

from creator_dashboard.config.settings import settings

if __name__ == "__main__":
    uvicorn.run(
        "creator_dashboard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
