#!/usr/bin/env python3
"""
Launch the Map Explorer server.

    python run.py --env production --port 8080
    python run.py --create-sample staging
"""

import argparse
import os
import sys

from app.config.loader import ENVIRONMENT_VARIABLE, ConfigLoader
from app.config.settings import Environment


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Map Explorer server")
    parser.add_argument(
        "--env",
        choices=[env.value for env in Environment],
        help="Environment to run (default: $ENVIRONMENT or development)",
    )
    parser.add_argument("--host", help="Bind address (overrides configuration)")
    parser.add_argument("--port", type=int, help="Bind port (overrides configuration)")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument(
        "--list-envs",
        action="store_true",
        help="List environments that have a .env.<environment> file",
    )
    parser.add_argument(
        "--create-sample",
        metavar="ENV",
        help="Write .env.<ENV>.sample and exit",
    )
    return parser


def main():
    args = build_parser().parse_args()

    if args.list_envs:
        envs = ConfigLoader.get_available_environments()
        print("Configured environments: " + (", ".join(envs) if envs else "none"))
        return

    if args.create_sample:
        try:
            path = ConfigLoader.create_sample_env_file(args.create_sample)
        except (OSError, ValueError) as e:
            print(f"✗ Could not write sample configuration: {e}")
            sys.exit(1)
        print(f"✓ Wrote {path}")
        return

    try:
        settings = ConfigLoader.load_environment_config(args.env)
    except ValueError as e:
        print(f"✗ Invalid configuration: {e}")
        sys.exit(1)

    # The app module resolves its settings again in the server process
    os.environ[ENVIRONMENT_VARIABLE] = settings.environment.value

    host = args.host or settings.host
    port = args.port or settings.port
    reload = args.reload or settings.reload

    print(
        f"🗺  {settings.app_name} v{settings.app_version} "
        f"[{settings.environment.value}] on http://{host}:{port}"
    )

    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=1 if reload else settings.workers,
        log_level=settings.log_level.value.lower(),
    )


if __name__ == "__main__":
    main()
