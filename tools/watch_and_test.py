"""
===========================================================
Automatic Rebuild + Test Watcher
===========================================================

Watches the package and the tests; on every change to a .py file it
(optionally) reinstalls the project in editable mode and reruns pytest from
the project root.

Usage
-----
    python3 tools/watch_and_test.py
    python3 tools/watch_and_test.py --no-install -k codec
    python3 tools/watch_and_test.py --paths examples

Dependencies
------------
    pip install -e ".[dev]"
"""

# --- Imports --------------------------------------------------------------

import os
import sys
import time
import argparse
import subprocess
from pathlib import Path
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
from colorama import Fore, Style, init as colorama_init


# --- Configuration --------------------------------------------------------

colorama_init(autoreset=True)
ROOT = Path(__file__).resolve().parents[1]         # project root (pyproject.toml)
DEFAULT_WATCH_DIRS = [ROOT / "src" / "array_csv", ROOT / "tests"]
PYTHON = sys.executable
IGNORED_DIR_NAMES = {"__pycache__", ".git", ".pytest_cache", ".mypy_cache", "build"}


# --- CLI Parsing ----------------------------------------------------------

def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="watch_and_test",
        description="Watch array_csv sources and rerun pytest on change.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("--no-install", action="store_true",
                   help="Do not run 'pip install -e .' before tests.")
    p.add_argument("--paths", nargs="*", default=[],
                   help="Additional paths to watch (folders or files).")
    p.add_argument("-k", dest="keyword", default="",
                   help="Only run tests matching this pytest -k expression.")
    p.add_argument("--interval", type=float, default=0.5,
                   help="Cooldown between detections (seconds).")
    return p.parse_args(argv)


# --- Utils ----------------------------------------------------------------

def banner(title: str) -> None:
    print(f"\n{Fore.CYAN}{'=' * 60}")
    print(f"{Style.BRIGHT}{title}")
    print(f"{Fore.CYAN}{'=' * 60}{Style.RESET_ALL}")


def run_cmd(cmd: list[str]) -> int:
    """Run a command from the project ROOT and return its exit code."""
    print(f"{Fore.BLUE}> {Style.BRIGHT}{' '.join(cmd)}{Style.RESET_ALL}")
    try:
        return subprocess.run(cmd, cwd=str(ROOT)).returncode
    except KeyboardInterrupt:
        return 130


def run_tests(skip_install: bool, keyword: str) -> None:
    banner(f"Python: {PYTHON}")
    if not os.environ.get("VIRTUAL_ENV"):
        print(f"{Fore.YELLOW}[warn] not running inside a virtualenv{Style.RESET_ALL}")

    if not skip_install:
        banner("pip install -e .")
        if run_cmd([PYTHON, "-m", "pip", "install", "-q", "-e", "."]) != 0:
            print(f"{Fore.RED}[error] pip install failed{Style.RESET_ALL}")
            return

    banner("pytest")
    cmd = [PYTHON, "-m", "pytest", "-v", "-rxXs", "--maxfail=5", f"--rootdir={ROOT}"]
    if keyword:
        cmd += ["-k", keyword]
    code = run_cmd(cmd)
    colour = Fore.GREEN if code == 0 else Fore.RED
    print(f"{colour}[{'ok' if code == 0 else 'fail'}] pytest exited with {code}{Style.RESET_ALL}")


# --- Watcher --------------------------------------------------------------

class ChangeHandler(FileSystemEventHandler):
    def __init__(self, skip_install: bool, keyword: str, cooldown: float):
        self._skip_install = skip_install
        self._keyword = keyword
        self._cooldown = cooldown
        self._last = 0.0

    def _trigger(self, path: str):
        p = Path(path)
        if p.suffix != ".py" or IGNORED_DIR_NAMES.intersection(p.parts):
            return
        now = time.time()
        if now - self._last < self._cooldown:
            return
        self._last = now
        print(f"\n{Fore.MAGENTA}[changed]{Style.RESET_ALL} {path}")
        run_tests(self._skip_install, self._keyword)

    def on_modified(self, event):
        if not event.is_directory:
            self._trigger(event.src_path)

    def on_created(self, event):
        if not event.is_directory:
            self._trigger(event.src_path)


# --- Main -----------------------------------------------------------------

def main(argv=None) -> int:
    args = parse_args(argv)
    watch_dirs = DEFAULT_WATCH_DIRS + [Path(p) for p in args.paths]

    banner("array_csv watcher")
    for d in watch_dirs:
        print(f"  - watching: {Fore.LIGHTBLACK_EX}{d}{Style.RESET_ALL}")
    print("Press Ctrl+C to stop.")

    handler = ChangeHandler(args.no_install, args.keyword, args.interval)
    observer = Observer()
    for d in watch_dirs:
        observer.schedule(handler, str(d), recursive=True)

    observer.start()
    try:
        run_tests(args.no_install, args.keyword)
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print(f"\n{Fore.YELLOW}[stop] watcher stopped by user{Style.RESET_ALL}")
        observer.stop()
    observer.join()
    return 0


# --- Entrypoint -----------------------------------------------------------

if __name__ == "__main__":
    raise SystemExit(main())
