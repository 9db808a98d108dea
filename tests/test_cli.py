"""Command line tests."""

import json

import pytest

from sitegen.__main__ import EXIT_INVALID, EXIT_OK, main

JOURNAL = [
    {
        "id": "m1",
        "action": "update",
        "modelName": "order",
        "changes": [{"type": "field", "operation": "add", "field": "note", "newValue": {"name": "note", "datatype": "TEXT"}}],
    }
]


@pytest.fixture
def project_file(tmp_path, sample_project):
    sample_project["blueprint"]["migrations"] = JOURNAL
    path = tmp_path / "project.json"
    path.write_text(json.dumps(sample_project), encoding="utf-8")
    return path


@pytest.mark.integration
def test_compile_writes_site_and_schema(tmp_path, project_file):
    out = tmp_path / "site"
    assert main(["compile", str(project_file), "--out", str(out), "--database", "postgres"]) == EXIT_OK

    assert (out / "src" / "app" / "page.tsx").exists()
    assert (out / "src" / "app" / "about_us" / "page.tsx").exists()
    assert (out / "src" / "views" / "feature_box.tsx").exists()
    assert (out / "src" / "styles" / "views.css").exists()
    assert "font-family: Roboto, sans-serif;" in (out / "src" / "styles" / "theme.css").read_text(encoding="utf-8")

    base = (out / "migrations" / "000_base.sql").read_text(encoding="utf-8")
    assert '"userid" UUID NOT NULL' in base

    migrations = sorted((out / "migrations").glob("migration-*.sql"))
    assert len(migrations) == 1
    assert 'ALTER TABLE "order" ADD COLUMN "note" TEXT;' in migrations[0].read_text(encoding="utf-8")


@pytest.mark.integration
def test_compile_keeps_existing_base_schema(tmp_path, project_file):
    out = tmp_path / "site"
    (out / "migrations").mkdir(parents=True)
    (out / "migrations" / "000_base.sql").write_text("-- existing\n", encoding="utf-8")

    assert main(["compile", str(project_file), "--out", str(out)]) == EXIT_OK
    assert (out / "migrations" / "000_base.sql").read_text(encoding="utf-8") == "-- existing\n"


@pytest.mark.integration
def test_compile_skip_schema(tmp_path, project_file):
    out = tmp_path / "site"
    assert main(["compile", str(project_file), "--out", str(out), "--skip-schema"]) == EXIT_OK

    assert (out / "src" / "app" / "page.tsx").exists()
    assert not (out / "migrations").exists()


@pytest.mark.integration
def test_migrate_only_writes_delta(tmp_path, project_file):
    out = tmp_path / "site"
    assert main(["migrate", str(project_file), "--out", str(out)]) == EXIT_OK

    assert not (out / "migrations" / "000_base.sql").exists()
    assert len(list((out / "migrations").glob("migration-*.sql"))) == 1
    assert not (out / "src").exists()


@pytest.mark.integration
def test_schema_prints_base_schema(project_file, capsys):
    assert main(["schema", str(project_file), "--database", "mysql"]) == EXIT_OK

    out = capsys.readouterr().out
    assert "CREATE TABLE IF NOT EXISTS `order` (" in out
    assert "`id` VARCHAR(36) NOT NULL PRIMARY KEY" in out


@pytest.mark.integration
def test_invalid_project_exit_code(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"name": "no blueprint here"}', encoding="utf-8")

    assert main(["compile", str(path), "--out", str(tmp_path / "site")]) == EXIT_INVALID
    assert not (tmp_path / "site").exists()


@pytest.mark.integration
def test_missing_file(tmp_path):
    assert main(["compile", str(tmp_path / "absent.json")]) == 1


@pytest.mark.unit
def test_unknown_database_rejected(project_file):
    with pytest.raises(SystemExit):
        main(["compile", str(project_file), "--database", "oracle"])
