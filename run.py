#!/usr/bin/env python3
"""
Application startup script with environment configuration support.
"""

import sys
import argparse

from coffee_finder.config.loader import ConfigLoader, load_config_for_environment


def resolve_app_target(settings, env_selected: bool = False):
    """
    Pick what uvicorn serves.

    Without reload the app is built from the loaded settings. The reloader
    needs an import string, so it serves the module-level app built from the
    process environment and .env, and an explicit --env cannot reach it.
    """
    if not settings.reload:
        from coffee_finder.main import create_app
        return create_app(settings)

    if env_selected:
        print(
            f"⚠ --env {settings.environment.value} is not applied with --reload; "
            "the reloaded app reads ENVIRONMENT and .env instead"
        )
    return "coffee_finder.main:app"


def main():
    """Main startup function with environment configuration"""
    parser = argparse.ArgumentParser(description="Coffee Finder Server")
    parser.add_argument(
        "--env",
        choices=["development", "staging", "production", "testing"],
        default=None,
        help="Environment to run (default: from ENVIRONMENT env var or development)"
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind to (overrides config)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind to (overrides config)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload (overrides config)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (overrides config)"
    )
    parser.add_argument(
        "--list-envs",
        action="store_true",
        help="List available environment configurations"
    )
    parser.add_argument(
        "--validate-env",
        help="Validate a specific environment configuration"
    )
    parser.add_argument(
        "--create-sample",
        help="Create a sample .env file for the specified environment"
    )

    args = parser.parse_args()

    # Handle utility commands
    if args.list_envs:
        envs = ConfigLoader.get_available_environments()
        print("Available environment configurations:")
        for env in envs:
            print(f"  - {env}")
        return

    if args.validate_env:
        is_valid = ConfigLoader.validate_environment_config(args.validate_env)
        if is_valid:
            print(f"✓ Environment '{args.validate_env}' configuration is valid")
        else:
            print(f"✗ Environment '{args.validate_env}' configuration is invalid or missing")
            sys.exit(1)
        return

    if args.create_sample:
        try:
            sample_file = ConfigLoader.create_sample_env_file(args.create_sample)
            print(f"✓ Sample configuration created: {sample_file}")
        except Exception as e:
            print(f"✗ Failed to create sample configuration: {e}")
            sys.exit(1)
        return

    try:
        settings = load_config_for_environment(args.env)
        print(f"✓ Loaded configuration for environment: {settings.environment.value}")
    except Exception as e:
        print(f"✗ Failed to load configuration: {e}")
        sys.exit(1)

    # Apply command line overrides
    if args.host:
        settings.host = args.host
    if args.port:
        settings.port = args.port
    if args.reload:
        settings.reload = True
    if args.debug:
        settings.debug = True

    print(f"Starting {settings.app_name} v{settings.app_version}")
    print(f"   Environment: {settings.environment.value}")
    print(f"   Host: {settings.host}")
    print(f"   Port: {settings.port}")
    print(f"   Search: '{settings.refresh.search_query}' within {settings.refresh.search_radius_m:.0f}m")
    print(f"   Route refresh debounce: {settings.refresh.debounce_delay_seconds}s")
    print(f"   Location policy: {settings.refresh.location_policy.value}")
    print(f"   Log Level: {settings.log_level.value}")

    import uvicorn
    from coffee_finder.main import configure_logging

    configure_logging(settings)
    target = resolve_app_target(settings, env_selected=args.env is not None)

    # the refresh controller is in-process state, so one worker only
    uvicorn.run(
        target,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        workers=1,
        log_level=settings.log_level.value.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
