"""Allow running as ``python -m towboat``"""

from .cli.main import main

if __name__ == "__main__":
    main()
