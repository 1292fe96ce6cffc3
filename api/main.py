"""
NEOWatch - Impact API
Purpose: serve impact predictions, scenarios and narrative reports as JSON.
"""

from fastapi import FastAPI

from api.routers import impact

app = FastAPI(title="NEOWatch Impact API", version="v1")


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(impact.router)
