#!/usr/bin/env python3
"""
Build standalone executable for Code-Launcher.

Usage:
    python build_exe.py

Output:
    dist/code-launcher(.exe)
"""

import shutil
import subprocess
import sys
from pathlib import Path


def main():
    project_root = Path(__file__).parent.resolve()
    dist_dir = project_root / "dist"
    build_dir = project_root / "build"
    entry_script = project_root / "launcher.py"

    print("[INFO] Building Code-Launcher standalone executable...")
    print(f"[INFO] Project root: {project_root}")

    try:
        import PyInstaller
        print(f"[OK] PyInstaller version: {PyInstaller.__version__}")
    except ImportError:
        print("[ERROR] PyInstaller not found. Install with: pip install pyinstaller")
        return 1

    for directory in (dist_dir, build_dir):
        if directory.exists():
            print(f"[INFO] Cleaning {directory.name} directory...")
            shutil.rmtree(directory)

    print("[INFO] Running PyInstaller...")
    cmd = [
        sys.executable,
        "-m",
        "PyInstaller",
        "--clean",
        "--noconfirm",
        "--onefile",
        "--console",
        "--name",
        "code-launcher",
        str(entry_script),
    ]

    result = subprocess.run(cmd, cwd=project_root)

    if result.returncode != 0:
        print("[ERROR] PyInstaller failed")
        return result.returncode

    exe_name = "code-launcher.exe" if sys.platform == "win32" else "code-launcher"
    exe_path = dist_dir / exe_name
    if exe_path.exists():
        size_mb = exe_path.stat().st_size / (1024 * 1024)
        print("[OK] Build successful!")
        print(f"[OK] Output: {exe_path}")
        print(f"[OK] Size: {size_mb:.1f} MB")
    else:
        print("[ERROR] Expected output not found")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
