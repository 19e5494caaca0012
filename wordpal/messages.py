"""User-facing strings shared by the CLI and the HTTP API."""

APP_TITLE = "Wordpal"

FAILED_DB_INIT_MESSAGE = "Could not open the word database."
FAILED_DB_WRITE_MESSAGE = "Could not write the word database."
GENERIC_RUNTIME_ERR_MESSAGE = "Something went wrong."
NO_WORDS_MESSAGE = "No more words to review right now. Come back later!"
