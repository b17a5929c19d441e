from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.logging_utils import init_logging
from app.routes import nutrition_routes

init_logging()

app = FastAPI(title="Nutrition Plan API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,  # your frontend origin(s)
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include Routers
app.include_router(nutrition_routes.router, prefix="/nutrition", tags=["Nutrition"])


@app.get("/")
def read_root():
    return {"message": "Nutrition Planner Backend Running!"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
