"""
Reset all Focus400 data by clearing the local store.
This removes every user, every session and the logged-in identity.
"""

import argparse

from BackEnd.core.config import STORE_KEYS
from BackEnd.core.store import SqliteStore


def reset_all_stats(store=None, assume_yes=False, ask=input):
    """Remove the store keys after confirmation. Returns True if data was cleared."""
    store = store or SqliteStore()
    present = [key for key in STORE_KEYS if store.get(key) is not None]
    if not present:
        print("No saved data found. Stats are already at 0.")
        return False

    if not assume_yes:
        confirm = ask("Are you sure you want to reset all stats? This cannot be undone. (yes/no): ")
        if confirm.strip().lower() not in ['yes', 'y']:
            print("Reset cancelled.")
            return False

    store.set_many({key: None for key in STORE_KEYS})
    print("✓ All users, sessions and the current login have been removed")
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Reset all Focus400 stats.")
    parser.add_argument("--yes", action="store_true", help="skip the confirmation prompt")
    args = parser.parse_args(argv)
    print("=" * 50)
    print("Focus400 - Reset All Stats")
    print("=" * 50)
    reset_all_stats(assume_yes=args.yes)


if __name__ == "__main__":
    main()
