#!/usr/bin/env python3
"""
Build script for the order-intake Lambda functions.

Each function directory under src/ is zipped together with the badge_intake
package and its runtime dependencies, installed from pyproject.toml.
"""
import os
import shutil
import subprocess
import sys
import zipfile
from pathlib import Path

FUNCTIONS = ("checkout", "get_templates", "upload_design")


def main():
    """Main build function"""
    project_root = Path(__file__).parent.parent
    src_dir = project_root / "src"
    build_dir = project_root / "build"

    build_dir.mkdir(exist_ok=True)

    print(f"Building Lambda functions: {list(FUNCTIONS)}")

    for function_name in FUNCTIONS:
        function_dir = src_dir / function_name
        zip_path = build_dir / f"{function_name}.zip"

        print(f"Building {function_name}...")

        temp_dir = build_dir / f"temp_{function_name}"
        if temp_dir.exists():
            shutil.rmtree(temp_dir)
        temp_dir.mkdir()

        # Function entry point at the archive root; pip puts the service package beside it
        shutil.copytree(function_dir, temp_dir, dirs_exist_ok=True)

        print(f"Installing dependencies for {function_name}...")
        subprocess.run([
            sys.executable, "-m", "pip", "install",
            str(project_root),
            "-t", str(temp_dir),
            "--no-compile",
        ], check=True)

        print(f"Creating {function_name}.zip...")
        with zipfile.ZipFile(zip_path, 'w', zipfile.ZIP_DEFLATED) as zipf:
            for root, _, files in os.walk(temp_dir):
                for file in files:
                    file_path = Path(root) / file
                    arcname = file_path.relative_to(temp_dir)
                    zipf.write(file_path, arcname)

        shutil.rmtree(temp_dir)

        print(f"{function_name}.zip created ({zip_path.stat().st_size} bytes)")

    print("Build complete!")


if __name__ == "__main__":
    main()
