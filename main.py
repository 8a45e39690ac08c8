"""
Payment Receipt Resolver API - Main Application
FastAPI application resolving CBE / Telebirr transaction IDs into payment records

Run with: python main.py
Access API at: http://localhost:2268/getresult/<transaction_id>
Access API docs at: http://localhost:2268/docs
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from api.routes import router
from utils import load_config, setup_logging

config = load_config()
setup_logging(config['logging']['file'], config['logging']['level'])

# Create FastAPI app
app = FastAPI(
    title="Payment Receipt Resolver API",
    description="Resolve CBE and Telebirr transaction IDs into structured payment records",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router)

if __name__ == "__main__":
    import uvicorn

    host = config['server']['host']
    port = config['server']['port']
    print("=" * 60)
    print(f"✅ Server running at http://localhost:{port}")
    print("=" * 60)

    uvicorn.run("main:app", host=host, port=port)
