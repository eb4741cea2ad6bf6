import logging
from movielist.db import engine, Base
from movielist import models  # ensure models are imported

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    Base.metadata.create_all(bind=engine)
    logger.info(f"Tables created: {', '.join(sorted(Base.metadata.tables))}")


if __name__ == "__main__":
    main()
