from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stock_agent.api.router import api_router

app = FastAPI(
    title="Stock Analysis Agent",
    description="AI stock evaluation report API",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    from stock_agent.config import settings

    uvicorn.run(app, host=settings.backend_host, port=settings.backend_port)
