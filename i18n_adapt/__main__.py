"""Allow running as: python -m i18n_adapt"""

from i18n_adapt.cli import app

if __name__ == "__main__":
    app()
