import os
from dotenv import load_dotenv

load_dotenv()

user = os.getenv("DB_USER")
password = os.getenv("DB_PASSWORD")
host = os.getenv("DB_HOST", "localhost")
port = os.getenv("DB_PORT", "5432")
db_name = os.getenv("DB_NAME")
pepper_data = os.getenv("PEPPER_DATA", "")

log_level = os.getenv("LOG_LEVEL", "INFO").upper()
sql_echo = os.getenv("SQL_ECHO", "").lower() in ("1", "true", "yes")

# DATABASE_URL wins over the DB_* parts, e.g. sqlite+aiosqlite:///./store.sqlite3
database_url = os.getenv(
    "DATABASE_URL",
    f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{db_name}",
)

if __name__ == "__main__":
    print(database_url, log_level, sql_echo)
