from pathlib import Path

from authgate.auth.credentials import verify_credentials
from authgate.auth.registration import register_user
from authgate.seed import SeedUser, load_seed_file, seed_users


def test_load_seed_file(tmp_path: Path):
    p = tmp_path / "seed.yml"
    p.write_text(
        "version: 1\n"
        "users:\n"
        "  - name: Test User\n"
        "    email: teste@mail.com\n"
        "    password: senha123\n"
        "  - just a string\n",
        encoding="utf-8",
    )
    assert load_seed_file(p) == [SeedUser(name="Test User", email="teste@mail.com", password="senha123")]
    assert load_seed_file(tmp_path / "missing.yml") == []


def test_shipped_seed_file_parses():
    repo_root = Path(__file__).resolve().parents[1]
    entries = load_seed_file(repo_root / "data" / "seed_users.yml")
    assert entries and all(e.email for e in entries)


def test_seed_replaces_existing_users(store):
    assert register_user(store, "Old", "old@mail.com", "abcdef").ok

    created = seed_users(
        store,
        [
            SeedUser(name="Test User", email="teste@mail.com", password="senha123"),
            SeedUser(name="Broken", email="broken", password="senha123"),
        ],
    )

    assert [u.email for u in created] == ["teste@mail.com"]
    assert store.find_by_email("old@mail.com") is None
    assert verify_credentials(store, "teste@mail.com", "senha123").ok
