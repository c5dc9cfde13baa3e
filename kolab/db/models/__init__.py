import importlib

_MODEL_MODULES = (
    "kolab.db.models.notification_model",
    "kolab.db.models.message_model",
    "kolab.db.models.project_member_model",
    "kolab.db.models.post_participant_model",
)


def load_all_models() -> None:
    """Import semua modul model agar terdaftar di metadata Base."""
    for module in _MODEL_MODULES:
        importlib.import_module(module)
