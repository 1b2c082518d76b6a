"""Development script to run checks (formatting, linting, tests) and a sample resolution."""

import argparse
import subprocess
import sys


def run_command(command: list[str], step_name: str) -> None:
    """Run a shell command as a step in the development process."""
    print(f"\n--- Running Step: {step_name} ---")
    print(f"$ {' '.join(command)}")
    try:
        subprocess.run(command, check=True)
    except subprocess.CalledProcessError:
        print(f"\n❌ Failed: {step_name}")
        sys.exit(1)


def main() -> None:
    """Run the development checks and optionally resolve a build graph."""
    parser = argparse.ArgumentParser(description="Run development checks.")
    parser.add_argument(
        "--ci", action="store_true", help="Verify only: no auto-fixes, no sample run"
    )
    parser.add_argument("--graph", help="Build graph to resolve after the checks pass")
    parser.add_argument("--config", help="Resolver configuration used with --graph")
    args = parser.parse_args()

    if args.ci:
        run_command(["ruff", "format", "--check"], "Ruff Format Check")
        run_command(["ruff", "check"], "Ruff Linting")
    else:
        # Run auto-formatting and fixing
        run_command(["ruff", "format"], "Ruff Formatting")
        run_command(["ruff", "check", "--fix"], "Ruff Linting & Fixes")

    run_command([sys.executable, "-m", "pytest"], "Tests")

    if args.graph and not args.ci:
        cmd = [sys.executable, "-m", "jsdeps.cli", args.graph]
        if args.config:
            cmd.extend(["--config", args.config])
        run_command(cmd, "Resolve Build Graph")

    print("\n✅ All development checks passed successfully.")


if __name__ == "__main__":
    main()
