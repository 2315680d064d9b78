"""Allow running the CLI as a module: python -m kube_manager"""

from .cli import main

if __name__ == "__main__":
    main()
