DEFAULT_CONFIG = {
    "headless": True,
    "viewport": {"width": 1280, "height": 720},
    "language": "en-US",
    # Navigation is bounded by this timeout (ms) and never retried.
    "navigation_timeout": 30000,
    "wait_until": "networkidle",
    # Extra wait (s) after navigation so late scripts can render.
    "settle_delay": 2.0,
    "launch_args": [
        "--no-sandbox",
        "--disable-setuid-sandbox",
        "--disable-dev-shm-usage",  # Mitigate shared memory issues in Docker
        "--disable-gpu",
    ],
}

AXE_CORE_URL = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.7.2/axe.min.js"
AXE_UNAVAILABLE = "axe-core not loaded"
