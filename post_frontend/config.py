# post_frontend/config.py
import os
import logging

logger = logging.getLogger(__name__)

# Backend API URL
POST_API_URL = os.getenv('POST_API_URL', 'https://localhost:7198').rstrip('/')

# Server Configuration
HOST = os.getenv('HOST', '0.0.0.0')
PORT = int(os.getenv('PORT', '8006'))

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Card date labels (mirrors the browser's locale date)
DATE_FORMAT = os.getenv('DATE_FORMAT', '%m/%d/%Y')

# Form limits
NAME_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000

# Prometheus Metrics Configuration
REQUEST_LATENCY_BUCKETS = (
    0.001,
    0.005,
    0.01,
    0.025,
    0.05,
    0.075,
    0.1,
    0.25,
    0.5,
    0.75,
    1.0,
    2.5,
    5.0,
    10.0,
)
