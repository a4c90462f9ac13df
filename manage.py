#!/usr/bin/env python
"""
Command line entry point for the medrecords service.

Use it to apply migrations, run the development server and call the
registry's own commands such as ``ensure_demo_hospital``.
"""
import os
import sys


def main() -> None:
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'medrecords.settings')
    try:
        from django.core.management import execute_from_command_line  # type: ignore
    except ImportError as exc:
        raise ImportError(
            "Django is not importable; install the project with `pip install -e .` "
            "inside the active virtual environment."
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
