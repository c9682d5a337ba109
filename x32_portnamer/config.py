"""
X32 Port Namer - configuration
"""

import logging

# Network configuration for the consoles
X32_PORT = 10023  # Standard OSC port for X32 / M32 consoles
XAIR_PORT = 10024  # Standard OSC port for X Air / MR consoles
LOCAL_PORT = 0  # Local port for the OSC server (0 = pick a free one)
BROADCAST_ADDRESS = "255.255.255.255"

# Timeouts (seconds)
QUERY_TIMEOUT = 2.0  # Waiting for a single parameter reply
XREMOTE_INTERVAL = 9.0  # Consoles drop /xremote subscriptions after 10s
DISCOVERY_TIMEOUT = 1.0  # Waiting for an /xinfo reply per attempt
DISCOVERY_ATTEMPTS = 10

# Host software expects the console clock at this rate
REQUIRED_SAMPLE_RATE = 44100

# HTTP service
HTTP_HOST = "0.0.0.0"
HTTP_PORT = 8000

# Logging
LOG_LEVEL = logging.INFO
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
