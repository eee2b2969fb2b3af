#!/usr/bin/env python3
import os, sys, subprocess, argparse

def main():
    ap = argparse.ArgumentParser(description="Run clausal test suite")
    ap.add_argument("--pattern", default="test_*.py", help="Test module pattern for unittest discovery")
    ap.add_argument("--python", default=sys.executable, help="Python interpreter to use")
    args = ap.parse_args()

    env = os.environ.copy()

    cmd = [args.python, "-m", "unittest", "discover", "-s", "tests", "-p", args.pattern, "-v"]
    print(">> Running:", " ".join(cmd))
    rc = subprocess.call(cmd, env=env)
    sys.exit(rc)

if __name__ == "__main__":
    main()
