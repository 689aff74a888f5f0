"""Initialize database tables and the default template catalog."""
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.run import init_database


if __name__ == "__main__":
    try:
        created = init_database()
    except Exception as e:
        print(f"✗ Error initializing database: {e}")
        sys.exit(1)
    if created:
        print(f"✓ Seeded {created} templates")
    else:
        print("✓ Database already initialized")
