"""
Tests for Author Pages

Tests for /catalog/authors and /catalog/author/* routes.
"""

from datetime import date

from fastapi import status

from catalog.models import Author


class TestListAuthors:
    """Tests for GET /catalog/authors."""

    def test_list_authors_empty(self, client):
        response = client.get("/catalog/authors")

        assert response.status_code == status.HTTP_200_OK
        assert "There are no authors." in response.text

    def test_list_authors_with_data(self, client, sample_author):
        """Test the list shows the display name and lifespan."""
        response = client.get("/catalog/authors")

        assert response.status_code == status.HTTP_200_OK
        assert "Asimov, Isaac" in response.text
        assert "Jan 2, 1920 - Apr 6, 1992" in response.text

    def test_list_authors_sorted_by_family_name(self, client, store):
        store.create(Author, {"first_name": "Ben", "family_name": "Bova"})
        store.create(Author, {"first_name": "Isaac", "family_name": "Asimov"})

        response = client.get("/catalog/authors")

        assert response.text.index("Asimov, Isaac") < response.text.index("Bova, Ben")


class TestAuthorDetail:
    """Tests for GET /catalog/author/{id}."""

    def test_author_detail_lists_books(self, client, sample_author, sample_book):
        response = client.get(sample_author.url)

        assert response.status_code == status.HTTP_200_OK
        assert "Author: Asimov, Isaac" in response.text
        assert "Foundation" in response.text

    def test_author_detail_unknown_birth_date(self, client, store):
        author = store.create(Author, {"first_name": "Bob", "family_name": "Billings"})

        response = client.get(author.url)

        assert response.status_code == status.HTTP_200_OK
        assert "unknown - " in response.text
        assert "This author has no books." in response.text

    def test_author_detail_not_found(self, client):
        response = client.get("/catalog/author/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "Author not found" in response.text

    def test_author_detail_id_too_large_for_database(self, client):
        response = client.get(f"/catalog/author/{'9' * 25}")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestCreateAuthor:
    """Tests for /catalog/author/create."""

    def test_create_author(self, client, store):
        response = client.post(
            "/catalog/author/create",
            data={
                "first_name": "Patrick",
                "family_name": "Rothfuss",
                "date_of_birth": "1973-06-06",
                "date_of_death": "",
            },
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        author = store.find_one(Author, Author.family_name == "Rothfuss")
        assert response.headers["location"] == author.url
        assert author.date_of_birth == date(1973, 6, 6)
        assert author.date_of_death is None

    def test_create_author_missing_names(self, client, store):
        response = client.post(
            "/catalog/author/create",
            data={"first_name": "  ", "family_name": ""},
        )

        assert response.status_code == status.HTTP_200_OK
        assert "First name must be specified." in response.text
        assert "Family name must be specified." in response.text
        assert store.count(Author) == 0

    def test_create_author_invalid_date(self, client, store):
        """Test an invalid date keeps the other entered values."""
        response = client.post(
            "/catalog/author/create",
            data={
                "first_name": "Jim",
                "family_name": "Jones",
                "date_of_birth": "16/12/1971",
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert "Invalid date of birth" in response.text
        assert 'value="Jim"' in response.text
        assert 'value="16/12/1971"' in response.text
        assert store.count(Author) == 0

    def test_create_author_name_too_long(self, client):
        response = client.post(
            "/catalog/author/create",
            data={"first_name": "x" * 101, "family_name": "Jones"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert "Must be at most 100 characters" in response.text


class TestUpdateAuthor:
    """Tests for /catalog/author/{id}/update."""

    def test_update_form_prefilled(self, client, sample_author):
        response = client.get(f"{sample_author.url}/update")

        assert response.status_code == status.HTTP_200_OK
        assert 'value="Isaac"' in response.text
        assert 'value="1920-01-02"' in response.text

    def test_update_form_not_found(self, client):
        response = client.get("/catalog/author/99999/update")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_replaces_all_fields(self, client, store, sample_author):
        """Test an update clears fields left empty in the form."""
        response = client.post(
            f"{sample_author.url}/update",
            data={
                "first_name": "Isaac",
                "family_name": "Asimov",
                "date_of_birth": "1920-01-02",
                "date_of_death": "",
            },
            follow_redirects=False,
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == sample_author.url
        assert store.get(Author, sample_author.id).date_of_death is None

    def test_update_missing_author_with_invalid_form(self, client):
        """Test a missing author is a 404 before the form is validated."""
        response = client.post("/catalog/author/99999/update", data={"first_name": ""})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_author_invalid(self, client, store, sample_author):
        response = client.post(
            f"{sample_author.url}/update",
            data={"first_name": "", "family_name": "Asimov", "date_of_death": "soon"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert "First name must be specified." in response.text
        assert "Invalid date of death" in response.text
        assert store.get(Author, sample_author.id).first_name == "Isaac"


class TestDeleteAuthor:
    """Tests for /catalog/author/{id}/delete."""

    def test_delete_confirmation_lists_books(self, client, sample_author, sample_book):
        response = client.get(f"{sample_author.url}/delete")

        assert response.status_code == status.HTTP_200_OK
        assert "Delete the following books" in response.text
        assert "Foundation" in response.text

    def test_delete_confirmation_not_found(self, client):
        response = client.get("/catalog/author/99999/delete")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_author_success(self, client, store, sample_author):
        response = client.post(f"{sample_author.url}/delete", follow_redirects=False)

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog/authors"
        assert store.get(Author, sample_author.id) is None

    def test_delete_author_with_books_is_blocked(self, client, store, sample_author, sample_book):
        response = client.post(f"{sample_author.url}/delete", follow_redirects=False)

        assert response.status_code == status.HTTP_200_OK
        assert "Foundation" in response.text
        assert store.get(Author, sample_author.id) is not None

    def test_delete_missing_author_redirects_to_list(self, client):
        response = client.post("/catalog/author/99999/delete", follow_redirects=False)

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog/authors"

    def test_delete_id_too_large_for_database(self, client):
        response = client.post(f"/catalog/author/{'9' * 25}/delete", follow_redirects=False)

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog/authors"
