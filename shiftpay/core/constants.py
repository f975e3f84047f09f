"""
Service-wide constants
"""

SERVICE_NAME = "shiftpay-backend"
DEFAULT_VERSION = "1.0.0"
