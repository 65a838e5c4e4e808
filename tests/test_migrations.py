"""
Tests for the Alembic migrations bundled with the package
"""

import os

from alembic.script import ScriptDirectory
from alembic.util import CommandError

from solar_inventory import main


class TestMigrations:
    def test_scripts_resolve_outside_source_tree(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        script = ScriptDirectory.from_config(main.migration_config())

        assert os.path.isfile(os.path.join(script.dir, "env.py"))
        assert script.get_current_head() == "0002_add_fks"

    def test_revision_chain(self):
        script = ScriptDirectory.from_config(main.migration_config())
        revisions = [rev.revision for rev in script.walk_revisions()]
        assert revisions == ["0002_add_fks", "0001_init"]

    def test_failed_upgrade_is_logged_not_raised(self, monkeypatch):
        def fail(config, revision):
            raise CommandError("Can't locate revision")

        monkeypatch.setattr(main.command, "upgrade", fail)
        main.run_migrations()
