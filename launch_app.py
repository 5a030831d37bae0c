#!/usr/bin/env python3
"""Camera App launcher

This script sets up the Python path and launches the camera application.

Usage:
    python launch_app.py                   # Launch with the real camera
    python launch_app.py --backend sim     # Launch with a simulated camera
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

if __name__ == "__main__":
    from ui.main_window import main
    sys.exit(main())
