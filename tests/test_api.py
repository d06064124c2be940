"""
Integration tests for the HTTP routes using FastAPI TestClient.

Every test runs against a temporary content directory and user registry.
"""

import pytest
import yaml

from tests.conftest import ADMIN_PASSWORD, ADMIN_USERNAME

SIGN_IN_REQUIRED = "You must be signed in to do that."


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy"}


class TestViewing:
    def test_index(self, client, create_document):
        names = ["about.md", "changes.txt", "history.txt"]
        for name in names:
            create_document(name)

        resp = client.get("/")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        for name in names:
            assert name in resp.text

    def test_plain_text_document(self, client, create_document):
        create_document("history.txt", "2013 - Ruby 2.1 released.")

        resp = client.get("/history.txt")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.content == b"2013 - Ruby 2.1 released."

    def test_markdown_document(self, client, create_document):
        create_document("about.md", "# Ruby is...")

        resp = client.get("/about.md")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "<h1>Ruby is...</h1>" in resp.text

    def test_missing_document(self, client):
        resp = client.get("/badinput.txt")

        assert resp.status_code == 302
        assert resp.headers["location"] == "/"

        resp = client.get("/")
        assert "badinput.txt does not exist." in resp.text

        # одноразовое сообщение больше не показывается
        resp = client.get("/")
        assert "badinput.txt does not exist." not in resp.text

    @pytest.mark.parametrize("path, name", [
        ("/.hidden.txt", ".hidden.txt"),
        ("/..users.yml", "..users.yml"),
    ])
    def test_rejected_name_reads_as_missing(self, client, path, name):
        resp = client.get(path)

        assert resp.status_code == 302
        assert resp.headers["location"] == "/"
        assert f"{name} does not exist." in client.get("/").text

    def test_index_shows_document_metadata(self, client, create_document):
        create_document("about.md", "# Ruby is great")

        resp = client.get("/")

        assert "markdown, 15 bytes, 4 words" in resp.text

    def test_unsupported_kind_is_not_rendered(self, client, document_repository):
        document_repository.data_path.joinpath("image.png").write_bytes(b"\x89PNG")

        resp = client.get("/image.png")

        assert resp.status_code == 422
        assert "image.png cannot be displayed" in resp.text

    def test_index_shows_sign_in_links_when_signed_out(self, client):
        resp = client.get("/")
        assert "Sign In" in resp.text
        assert "New Document" not in resp.text


class TestAccessControl:
    @pytest.mark.parametrize("method, path", [
        ("get", "/new"),
        ("post", "/new"),
        ("get", "/changes.txt/edit"),
        ("post", "/changes.txt"),
        ("post", "/changes.txt/duplicate"),
        ("post", "/changes.txt/delete"),
    ])
    def test_signed_out_is_redirected(self, client, create_document, method, path):
        create_document("changes.txt", "original")

        resp = getattr(client, method)(path)

        assert resp.status_code == 302
        assert resp.headers["location"] == "/"
        assert SIGN_IN_REQUIRED in client.get("/").text
        assert client.get("/changes.txt").content == b"original"

    def test_signed_out_cannot_create(self, client, document_repository):
        client.post("/new", data={"file_name": "sneaky.txt"})
        assert not document_repository.exists("sneaky.txt")


class TestEditing:
    def test_edit_form(self, admin_client, create_document):
        create_document("changes.txt", "some text")

        resp = admin_client.get("/changes.txt/edit")

        assert resp.status_code == 200
        assert "<textarea" in resp.text
        assert '<button type="submit"' in resp.text
        assert "some text" in resp.text

    def test_edit_form_for_missing_document(self, admin_client):
        resp = admin_client.get("/nothing.txt/edit")

        assert resp.status_code == 302
        assert "nothing.txt does not exist." in admin_client.get("/").text

    def test_edit_form_for_rejected_name(self, admin_client):
        resp = admin_client.get("/.hidden.txt/edit")

        assert resp.status_code == 302
        assert ".hidden.txt does not exist." in admin_client.get("/").text

    def test_update(self, admin_client):
        resp = admin_client.post("/changes.txt", data={"content": "new content"})

        assert resp.status_code == 302
        assert "changes.txt has been updated" in admin_client.get("/").text
        assert admin_client.get("/changes.txt").text == "new content"

    def test_update_with_bad_extension(self, admin_client, document_repository):
        resp = admin_client.post("/changes.exe", data={"content": "x"})

        assert resp.status_code == 422
        assert "Please use the .txt or .md extension" in resp.text
        assert not document_repository.exists("changes.exe")


class TestCreating:
    def test_new_document_form(self, admin_client):
        assert "New Document" in admin_client.get("/").text

        resp = admin_client.get("/new")

        assert resp.status_code == 200
        assert '<form method="post" action="/new">' in resp.text
        assert "Add a new document:" in resp.text

    def test_create(self, admin_client, document_repository):
        resp = admin_client.post("/new", data={"file_name": "new_file.txt"})

        assert resp.status_code == 302
        assert "new_file.txt has been created" in admin_client.get("/").text
        assert document_repository.read("new_file.txt") == b""

    @pytest.mark.parametrize("file_name, message", [
        ("new_file", "Please use the .txt or .md extension when naming your file"),
        ("", "A name is required"),
    ])
    def test_create_bad_input(self, admin_client, document_repository, file_name, message):
        resp = admin_client.post("/new", data={"file_name": file_name})

        assert resp.status_code == 422
        assert message in resp.text
        assert document_repository.list_names() == []

    def test_create_existing(self, admin_client, create_document, document_repository):
        create_document("about.md", "# Keep me")

        resp = admin_client.post("/new", data={"file_name": "about.md"})

        assert resp.status_code == 422
        assert "about.md already exists" in resp.text
        assert document_repository.read("about.md") == b"# Keep me"


class TestDuplicateAndDelete:
    def test_duplicate(self, admin_client, create_document):
        create_document("about.md", "# Title")

        resp = admin_client.post("/about.md/duplicate")

        assert resp.status_code == 302
        index = admin_client.get("/").text
        assert "about.md has been duplicated" in index
        assert "about-dup.md" in index
        assert "<h1>Title</h1>" in admin_client.get("/about-dup.md").text

    def test_duplicate_collision(self, admin_client, create_document, document_repository):
        create_document("about.md", "new")
        create_document("about-dup.md", "old")

        resp = admin_client.post("/about.md/duplicate")

        assert resp.status_code == 422
        assert "about-dup.md already exists" in resp.text
        assert document_repository.read("about-dup.md") == b"old"

    def test_duplicate_missing(self, admin_client):
        resp = admin_client.post("/about.md/duplicate")

        assert resp.status_code == 302
        assert "about.md does not exist." in admin_client.get("/").text

    def test_delete(self, admin_client, create_document):
        for name in ("about.md", "changes.txt"):
            create_document(name)

        index = admin_client.get("/").text
        assert '<form class="inline" method="post" action="/about.md/delete">' in index

        resp = admin_client.post("/about.md/delete")

        assert resp.status_code == 302
        assert "about.md has been deleted" in admin_client.get("/").text
        assert admin_client.get("/about.md").status_code == 302


class TestSignIn:
    def test_signin_form(self, client):
        resp = client.get("/users/signin")

        assert resp.status_code == 200
        assert "<input" in resp.text
        assert '<button type="submit"' in resp.text

    def test_signin(self, client):
        resp = client.post("/users/signin", data={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})

        assert resp.status_code == 302
        index = client.get("/").text
        assert "Welcome!" in index
        assert f"Signed in as {ADMIN_USERNAME}" in index

    def test_signin_ignores_username_case(self, client):
        client.post("/users/signin", data={"username": "ADMIN", "password": ADMIN_PASSWORD})
        assert f"Signed in as {ADMIN_USERNAME}" in client.get("/").text

    @pytest.mark.parametrize("username, password", [
        (ADMIN_USERNAME, "wrong"),
        ("nobody", ADMIN_PASSWORD),
    ])
    def test_bad_signin(self, client, username, password):
        resp = client.post("/users/signin", data={"username": username, "password": password})

        assert resp.status_code == 422
        assert "Invalid Credentials" in resp.text
        assert f'value="{username}"' in resp.text
        assert "Signed in as" not in client.get("/").text

    def test_signout(self, admin_client):
        resp = admin_client.post("/users/signout")

        assert resp.status_code == 302
        index = admin_client.get("/").text
        assert "You have been signed out." in index
        assert "Sign In" in index
        assert admin_client.get("/new").status_code == 302


class TestSignUp:
    def test_signup_form(self, client):
        resp = client.get("/users/signup")
        assert resp.status_code == 200
        assert '<form method="post" action="/users/signup">' in resp.text

    def test_signup(self, client, settings):
        resp = client.post("/users/signup", data={"username": "newuser", "password": "words1"})

        assert resp.status_code == 302
        assert "Account newuser created." in client.get("/").text
        with open(settings.credentials_path) as f:
            users = yaml.safe_load(f)["users"]
        assert "newuser" in users
        assert users["newuser"] != "words1"

        resp = client.post("/users/signin", data={"username": "newuser", "password": "words1"})
        assert resp.status_code == 302

    @pytest.mark.parametrize("username, password, message", [
        ("ab$de", "words1", "Username must be only letters or numbers"),
        ("ab", "words1", "Username must be at least 5 chars long (Letters and Numbers)"),
        ("Admin", "words1", "Admin is already taken"),
        ("newuser", "pa$$word", "Password must be only letters or numbers"),
        ("newuser", "abc", "Password must be at least 5 chars long"),
    ])
    def test_signup_rules(self, client, settings, username, password, message):
        resp = client.post("/users/signup", data={"username": username, "password": password})

        assert resp.status_code == 422
        assert message in resp.text
        with open(settings.credentials_path) as f:
            assert list(yaml.safe_load(f)["users"]) == [ADMIN_USERNAME]

    def test_signup_redisplays_attempted_name(self, client):
        resp = client.post("/users/signup", data={"username": "newuser", "password": "abc"})
        assert 'value="newuser"' in resp.text
