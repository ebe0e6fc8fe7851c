"""Serverless entry point for the vibeflow HTTP API."""
import os
import sys

# Add src to path so imports work without an install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from vibeflow.config import VibeflowConfig  # noqa: E402
from vibeflow.web.app import create_app  # noqa: E402

# Deployed instances default to production unless told otherwise
os.environ.setdefault("VIBEFLOW_ENVIRONMENT", "production")

app = create_app(VibeflowConfig.from_env())
