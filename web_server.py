import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from rezdy_agent.config import Config, setup_logging
from rezdy_agent.main import create_server

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    server, session = await create_server()
    app.state.server = server
    app.state.session = session
    logger.info(f"MCP server ready with {len(server.list_tools())} tools")
    try:
        yield
    finally:
        await session.close()


app = FastAPI(lifespan=lifespan)

# Add CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health(request: Request):
    return {
        "status": "ok",
        "configured": request.app.state.session.is_configured,
    }


@app.post("/mcp")
async def mcp_endpoint(request: Request):
    """JSON-RPC 2.0 endpoint. Notifications are acknowledged with 202."""
    body = await request.body()
    response = await request.app.state.server.handle_message(body)
    if response is None:
        return Response(status_code=202)
    return JSONResponse(response)


if __name__ == "__main__":
    uvicorn.run("web_server:app", host=Config.MCP_HTTP_HOST, port=Config.MCP_HTTP_PORT)
