from bplus_research.store.db import init_db
import logging

logging.basicConfig(level=logging.INFO)

if __name__ == "__main__":
    logging.info("Initializing history database...")
    init_db()
    logging.info("History database initialized.")
