from userhub.models.export import ExportColumn, ExportRow

"""Session keys, redirect targets, and the sample export data."""

SESSION_IDENTITY_KEY = "identity"
SESSION_STATE_KEY = "oauth_state"

LOGIN_SUCCESS_REDIRECT = "/dashboard"
LOGIN_FAILURE_REDIRECT = "/"

EXPORT_FILENAME = "exported_data.csv"

# Placeholder data for /export/csv until it is backed by a real query.
SAMPLE_EXPORT_COLUMNS = [
    ExportColumn(id="id", title="ID"),
    ExportColumn(id="name", title="Name"),
    ExportColumn(id="email", title="Email"),
]
SAMPLE_EXPORT_ROWS: list[ExportRow] = [
    {"id": 1, "name": "John Doe", "email": "john@example.com"},
]
