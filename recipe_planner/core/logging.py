import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

def init_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=lvl, format=LOG_FORMAT)
    logging.getLogger("recipe_planner").setLevel(lvl)
    # Keep uvicorn logs consistent with our level
    logging.getLogger("uvicorn.error").setLevel(lvl)
    logging.getLogger("uvicorn.access").setLevel(lvl)
    # SQL echo only when explicitly debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if lvl <= logging.DEBUG else logging.WARNING)
