"""Default settings; override with FLASK_-prefixed environment variables."""

DEFAULTS = {
    "DEFAULT_CURRENT_AGE": 30,
    "DEFAULT_HORIZON_AGE": 65,
    "DEFAULT_END_AGE": 100,
    # percent
    "DEFAULT_CONSERVATIVE_RATE": 2.0,
    "DEFAULT_GROWTH_RATE": 5.0,
    "DEFAULT_WITHDRAWAL_RATE": 4.0,
    "CORS_ORIGINS": [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ],
    "LOG_LEVEL": "INFO",
}
