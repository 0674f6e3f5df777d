#!/usr/bin/env python3
"""
Interest Calculator Entry Point

Starts the FastAPI server with the interest calculation endpoints.
"""

import sys

from interest_calculator.api import run_server
from interest_calculator.config import get_config


if __name__ == "__main__":
    settings = get_config()

    print("Starting Interest Calculator...")
    print(f"API available at: http://localhost:{settings.api_port}")
    print(f"Documentation at: http://localhost:{settings.api_port}/docs")
    print()

    try:
        run_server(
            host=settings.api_host,
            port=settings.api_port,
            debug=settings.api_debug
        )
    except KeyboardInterrupt:
        print("\nShutting down Interest Calculator...")
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)
