import pytest

from discodocs.naming import (
    api_version,
    crate_name,
    directory_name,
    hub_type,
    kebab_case,
    library_name,
    page_name,
    snake_case,
    title_words,
    version_string,
)


class TestCaseConversion:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("listOfflineMetadata", "list-offline-metadata"),
            ("entityTypes", "entity-types"),
            ("drive_document_id", "drive-document-id"),
            ("$.xgafv", "$-xgafv"),
            ("prettyPrint", "pretty-print"),
            ("get", "get"),
        ],
    )
    def test_kebab_case(self, name, expected):
        assert kebab_case(name) == expected

    def test_snake_case_drops_dollar(self):
        assert snake_case("listOfflineMetadata") == "list_offline_metadata"
        assert snake_case("$.xgafv") == "xgafv"

    def test_title_words(self):
        assert title_words("agent-entity-types-batch-delete") == "Agent Entity Types Batch Delete"
        assert title_words("billingAccounts") == "Billing Accounts"


class TestLibraryNames:
    @pytest.mark.parametrize(
        "version, expected",
        [
            ("v1", "1"),
            ("v1beta1", "1_beta1"),
            ("v1.1", "1d1"),
            ("v1management", "1_management"),
            ("v2alpha", "2_alpha"),
        ],
    )
    def test_api_version(self, version, expected):
        assert api_version(version) == expected

    def test_library_name(self):
        assert library_name("books", "v1") == "books1"
        assert library_name("billingbudgets", "v1beta1") == "billingbudgets1_beta1"

    def test_crate_and_directory(self, books):
        assert crate_name(books) == "google-books1"
        assert crate_name(books, cli=True) == "google-books1-cli"
        assert directory_name(books) == "books1"
        assert directory_name(books, cli=True) == "books1-cli"

    def test_hub_type_prefers_canonical_name(self, books, budgets):
        assert hub_type(books) == "Books"
        assert hub_type(budgets) == "CloudBillingBudget"

    def test_version_string(self, books):
        assert version_string(books, "5.0.2") == "5.0.2+20230117"
        books.revision = ""
        assert version_string(books, "5.0.2") == "5.0.2"

    def test_page_name(self):
        assert page_name("mylibrary", "bookshelves-add-volume") == "mylibrary_bookshelves-add-volume.md"
        assert page_name("billingAccounts", "budgets-create") == "billing-accounts_budgets-create.md"
