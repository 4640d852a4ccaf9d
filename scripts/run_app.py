#!/usr/bin/env python
"""
Run the Streamlit order wizard.

Usage:
    python scripts/run_app.py [--port 8501]
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path


def main():
    parser = argparse.ArgumentParser(description="Start the Iftar Box order wizard")
    parser.add_argument('--port', type=int, default=8501)
    args = parser.parse_args()

    project_root = Path(__file__).parent.parent
    ui_path = project_root / 'src' / 'iftar_box' / 'ui' / 'app_streamlit.py'

    if not ui_path.exists():
        print(f"ERROR: wizard UI not found at {ui_path}")
        sys.exit(1)

    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(project_root / 'src'), env.get("PYTHONPATH")]))

    cmd = [sys.executable, '-m', 'streamlit', 'run', str(ui_path), '--server.port', str(args.port)]
    print(f"Starting order wizard: {' '.join(cmd)}")

    try:
        subprocess.run(cmd, cwd=str(project_root), env=env)
    except KeyboardInterrupt:
        print("\nWizard stopped.")


if __name__ == "__main__":
    main()
