from discodocs.activities import find_activity
from discodocs.readme import pick_example_activity, render_library_readme
from discodocs.text import ERROR_CATEGORIES


class TestLibraryReadme:
    def test_header(self, books, test_settings):
        readme = render_library_readme(books, test_settings)
        assert readme.startswith("<!---\nDO NOT EDIT !\n")
        assert "the 'books' v1 discovery document" in readme
        assert "The `google-books1` library allows access to all features of the *Google books* service." in readme
        assert "crate version *5.0.2+20230117*" in readme
        assert "[official documentation site](https://code.google.com/apis/books/docs/v1/getting_started.html)" in readme

    def test_features_list_resources(self, books, test_settings):
        readme = render_library_readme(books, test_settings)
        assert "central *hub* (Books)" in readme
        assert "* bookshelves\n * *get*, *list* and *volumes list*" in readme
        assert "* dictionary\n * *list offline metadata*" in readme
        assert "Upload supported by" not in readme

    def test_media_features(self, drive, test_settings):
        readme = render_library_readme(drive, test_settings)
        assert "Upload supported by ...\n\n* *files create*" in readme
        assert "Download supported by ...\n\n* *files get*" in readme

    def test_structures(self, books, test_settings):
        readme = render_library_readme(books, test_settings)
        assert "* `Bookshelf` *(response result, part)*" in readme
        assert "* `BooksCloudloadingResource` *(request value, response result)*" in readme

    def test_usage_example(self, books, test_settings):
        readme = render_library_readme(books, test_settings)
        assert 'google-books1 = "*"' in readme
        assert "use books1::{Books, oauth2, hyper, hyper_rustls, chrono, FieldMask};" in readme
        assert 'let result = hub.bookshelves().volumes_list("userId", "shelf")' in readme
        assert ".max_results(42)" in readme
        assert ".show_preorders(true)" in readme
        for variant, _ in ERROR_CATEGORIES:
            assert f"Error::{variant}" in readme

    def test_request_example(self, budgets, test_settings):
        readme = render_library_readme(budgets, test_settings)
        # list has the most optional parameters, so it is the showcase
        assert "hub.billing_accounts().budgets_list(" in readme
        assert "let mut req" not in readme

    def test_overview_and_license(self, books, test_settings):
        readme = render_library_readme(books, test_settings, overview="An overview.")
        assert "An overview." in readme
        assert "# License" in readme
        assert "generated by Sebastian Thiel" in readme
        assert "(https://github.com/Byron/google-apis-rs/tree/main/gen/books1/LICENSE.md)" in readme


class TestExampleActivity:
    def test_most_optional_parameters(self, books):
        assert pick_example_activity(books).id == "books.bookshelves.volumes.list"

    def test_tie_broken_by_id(self, drive):
        # create and get both have a single optional parameter
        assert pick_example_activity(drive) == find_activity(drive, "drive.files.create")

    def test_no_activities(self):
        from discodocs.discovery import RestDescription

        assert pick_example_activity(RestDescription(name="empty", version="v1")) is None
