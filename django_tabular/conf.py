"""
Django-Tabular Settings

Configuration is read from Django settings under the DJANGO_TABULAR key.
All settings have sensible defaults.

Example:
    # settings.py
    DJANGO_TABULAR = {
        'DATABASE': 'reporting',
        'DEFAULT_LENGTH': 25,
        'MAX_LENGTH': 500,
    }
"""

from django.conf import settings

DEFAULTS = {
    # Connection alias used by DjangoDatabase
    "DATABASE": "default",
    # Pagination
    "DEFAULT_LENGTH": 10,
    "MAX_LENGTH": None,  # None disables clamping; length=-1 is always honoured
    # Extra json.dumps keyword arguments for JsonResponse, e.g. {"ensure_ascii": False}
    "JSON_DUMPS_PARAMS": None,
    # Logging
    "LOG_QUERIES": False,  # Log counts and final SQL at INFO level
    # CSRF protection (secure by default)
    "CSRF_EXEMPT": False,
}


class TabularSettings:
    """
    A settings object that allows django-tabular settings to be accessed as
    properties. For example:

        from django_tabular.conf import tabular_settings
        print(tabular_settings.DEFAULT_LENGTH)

    Settings can be overridden in Django settings.py under DJANGO_TABULAR key.
    """

    def __init__(self, defaults=None):
        self.defaults = defaults or DEFAULTS
        self._cached_attrs = set()

    @property
    def user_settings(self):
        if not hasattr(self, "_user_settings"):
            self._user_settings = getattr(settings, "DJANGO_TABULAR", {})
        return self._user_settings

    def __getattr__(self, attr):
        if attr not in self.defaults:
            raise AttributeError(f"Invalid django-tabular setting: '{attr}'")

        try:
            val = self.user_settings[attr]
        except KeyError:
            val = self.defaults[attr]

        # Cache the result
        self._cached_attrs.add(attr)
        setattr(self, attr, val)
        return val

    def reload(self):
        """Reload settings (useful for testing)."""
        for attr in self._cached_attrs:
            try:
                delattr(self, attr)
            except AttributeError:
                pass
        self._cached_attrs.clear()
        if hasattr(self, "_user_settings"):
            delattr(self, "_user_settings")


tabular_settings = TabularSettings(DEFAULTS)
