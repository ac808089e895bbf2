"""
CLI entry point, when used as a module: `python -m lot`.

Useful for debugging in the IDEs (use the start-mode "Module", module "lot").
"""
from lot import cli

if __name__ == '__main__':
    cli.main()
