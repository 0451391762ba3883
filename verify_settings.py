import sys

try:
    from medassist.config.system_settings import system_settings
    print(f"SystemSettings loaded successfully.")
    print(f"DB URL: {system_settings.DATABASE_URL}")
    print(f"Primary source: {system_settings.PRIMARY_SOURCE} @ {system_settings.PRIMARY_BASE_URL}")
    print(f"Secondary source: {system_settings.SECONDARY_SOURCE} @ {system_settings.SECONDARY_BASE_URL}")
    print(f"Connectivity probe: {system_settings.CONNECTIVITY_PROBE_URL}")
    print(f"Auto-sync interval: {system_settings.AUTO_SYNC_INTERVAL_SECONDS}s")
except Exception as e:
    print(f"Error loading SystemSettings: {e}")
    sys.exit(1)
