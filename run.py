"""
DANFE HTML - Launcher Script

This script configures the Python path and runs the converter.
Use this instead of running src/main.py directly to avoid import issues.

Usage:
    python run.py nota.xml [pasta/ | lote.zip ...] [-o output] [--excel]
"""
import sys
from pathlib import Path

# Add src directory to Python path
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from main import cli


if __name__ == "__main__":
    cli()
