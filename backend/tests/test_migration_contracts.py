import unittest
from pathlib import Path

from app.db.models import KeyValueEntry


class TestMigrationContracts(unittest.TestCase):
    def test_initial_migration_creates_kv_entries(self) -> None:
        migration_path = Path(__file__).resolve().parents[1] / "alembic" / "versions" / "0001_kv_entries.py"
        content = migration_path.read_text(encoding="utf-8")
        self.assertIn(f'"{KeyValueEntry.__tablename__}"', content)
        self.assertIn("sa.LargeBinary()", content)
        self.assertIn('op.drop_table("kv_entries")', content)

    def test_model_columns_match_migration(self) -> None:
        columns = {c.name for c in KeyValueEntry.__table__.columns}
        self.assertEqual(columns, {"key", "value", "updated_at"})
