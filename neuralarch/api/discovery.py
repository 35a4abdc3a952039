# neuralarch/api/discovery.py

import os

from fastapi import APIRouter

router = APIRouter()

API_NAME = "NeuralArch Search API"
API_VERSION = "1.0.0"

ENDPOINTS = {
    "GET /api": "This info",
    "GET /api/ping": "Liveness ping",
    "POST /api/chat": "Assistant chat",
    "POST /api/shaurya-ai-enhanced": "Assistant chat with insights, suggestions and visualizations",
    "POST /api/nas-ai": "Architecture evaluate / optimize / suggest / compare",
    "POST /api/optimization": "Start an optimization session",
    "GET /api/optimization?searchId=": "Optimization session status",
    "PUT /api/optimization?searchId=": "Update an optimization session",
    "DELETE /api/optimization?searchId=": "Stop an optimization session",
    "POST /api/external-ai": "Simulated external AI provider call",
    "GET|POST /api/experiments": "List / create experiments",
    "GET|PUT|DELETE /api/experiments/{id}": "Read / update / delete an experiment",
    "GET /api/experiments/{id}/summary": "Experiment summary",
    "GET /api/experiments/{id}/progress": "Experiment progress log",
    "POST /api/progress": "Record search progress",
    "GET|POST /api/architectures": "List / create architectures",
    "GET /api/architectures/leaderboard": "Top architectures",
    "GET /api/architectures/{id}": "Architecture with layers",
    "POST /api/conversations": "Save a chat message",
    "GET /api/conversations/{session_id}": "Chat log",
    "GET /api/stats": "Global counts",
    "GET|PUT /api/profiles/{id}": "Read / upsert a user profile",
    "POST /api/profiles/{id}/refresh-stats": "Recompute profile aggregates",
    "GET /api/database/status": "Database configuration and connectivity",
}


@router.get("")
async def api_info():
    """Capability document listing every route"""
    return {
        "name": API_NAME,
        "version": API_VERSION,
        "description": "Neural Network Architecture Search API with the NeuralArch Assistant",
        "environment": os.getenv("ENVIRONMENT", "development"),
        "endpoints": ENDPOINTS,
        "chat_example": {
            "method": "POST",
            "url": "/api/chat",
            "body": {
                "messages": [
                    {"role": "user", "content": "Hello, help me with neural architecture search"},
                ],
            },
        },
    }


@router.get("/ping")
async def ping():
    return {"message": os.getenv("PING_MESSAGE", "ping")}
