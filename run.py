#!/usr/bin/env python3
"""
ATM Banking Backend Entry Point

Starts the FastAPI server with a fresh in-memory ledger.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from atm_banking.api.server import run_server
from atm_banking.config import get_config


if __name__ == "__main__":
    config = get_config()
    print("🏧 Starting ATM Banking Backend...")
    print("💰 All balances use Decimal precision")
    print(f"🌐 API available at: http://localhost:{config.api_port}")
    print(f"📚 Documentation at: http://localhost:{config.api_port}/docs")
    print()

    try:
        run_server()
    except KeyboardInterrupt:
        print("\n👋 Shutting down ATM Banking Backend...")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)
