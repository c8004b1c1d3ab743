import os

from dotenv import load_dotenv

# Example in .env:
# GRAPHHOPPER_API_KEY=...
# GRAPHHOPPER_URL=https://graphhopper.com/api/1/route
load_dotenv()

SERVICE_URL = os.getenv("GRAPHHOPPER_URL", "https://graphhopper.com/api/1/route")
API_KEY = os.getenv("GRAPHHOPPER_API_KEY")

DEFAULT_TIMEOUT_MS = 30 * 1000
POLYLINE_PRECISION = 5
