"""Tests for the shared import pipeline, driven through the real entity specs."""

import json

import pytest

from app.bulk.pipeline import ImportPipeline, load_json_array
from app.catalog.importers import CATALOG_IMPORT_SPECS
from app.catalog.models import CatalogKind
from app.exceptions import ValidationError
from app.filaments.importers import FILAMENT_IMPORT_SPEC


def pipeline_for(spec, store) -> ImportPipeline:
    return ImportPipeline(spec, store.list_all, store.create)


def manufacturers(store) -> ImportPipeline:
    return pipeline_for(CATALOG_IMPORT_SPECS[CatalogKind.manufacturer], store)


def colors(store) -> ImportPipeline:
    return pipeline_for(CATALOG_IMPORT_SPECS[CatalogKind.color], store)


# ====================================================================
# Counting and deduplication
# ====================================================================


class TestCounting:
    @pytest.mark.asyncio
    async def test_headerless_rows_are_created(self, store):
        result = await manufacturers(store).import_csv("Prusament\nBambu Lab\n")

        assert (result.created, result.duplicates, result.errors) == (2, 0, 0)
        assert [row["name"] for row in store.rows] == ["Prusament", "Bambu Lab"]

    @pytest.mark.asyncio
    async def test_header_row_is_not_imported(self, store):
        spec = CATALOG_IMPORT_SPECS[CatalogKind.material]

        result = await pipeline_for(spec, store).import_csv("Name\nPLA\nPETG")

        assert result.created == 2
        assert [row["name"] for row in store.rows] == ["PLA", "PETG"]

    @pytest.mark.asyncio
    async def test_header_synonym_is_recognised(self, store):
        result = await manufacturers(store).import_csv("Vendor,Country\nPrusament,CZ\n")

        assert result.created == 1
        assert store.rows[0]["name"] == "Prusament"

    @pytest.mark.asyncio
    async def test_counts_cover_every_non_blank_row(self, store):
        store.rows.append({"id": 1, "name": "Prusament"})
        content = "Prusament\n\n,\nBambu Lab\nbambu lab\n  \nPolymaker\n"

        result = await manufacturers(store).import_csv(content)

        assert result.created + result.duplicates + result.errors == 5
        assert (result.created, result.duplicates, result.errors) == (2, 2, 1)

    @pytest.mark.asyncio
    async def test_import_is_idempotent(self, store):
        content = "Prusament\nBambu Lab\nPolymaker\n"

        first = await manufacturers(store).import_csv(content)
        second = await manufacturers(store).import_csv(content)

        assert (first.created, first.duplicates, first.errors) == (3, 0, 0)
        assert (second.created, second.duplicates, second.errors) == (0, 3, 0)

    @pytest.mark.asyncio
    async def test_duplicate_within_one_import(self, store):
        result = await manufacturers(store).import_csv("Prusament\nPRUSAMENT\n")

        assert result.created == 1
        assert result.duplicates == 1
        assert result.issues[0].row == 2
        assert result.issues[0].outcome == "duplicate"

    @pytest.mark.asyncio
    async def test_missing_required_field_is_an_error(self, store):
        result = await manufacturers(store).import_csv("Name\n,ignored\nPrusament\n")

        assert result.created == 1
        assert result.errors == 1
        assert result.issues[0].row == 2
        assert "name" in result.issues[0].reason

    @pytest.mark.asyncio
    async def test_create_failure_is_counted_and_import_continues(self, store):
        store.fail_on = {"Broken"}

        result = await manufacturers(store).import_csv("Broken\nPrusament\n")

        assert (result.created, result.errors) == (1, 1)
        assert result.issues[0].reason == "insert failed for Broken"

    @pytest.mark.asyncio
    async def test_failed_row_does_not_block_later_identical_row(self, store):
        store.fail_on = {"Broken"}

        result = await manufacturers(store).import_csv("Broken\nBroken\n")

        assert result.errors == 2
        assert result.duplicates == 0


# ====================================================================
# Colors
# ====================================================================


class TestColorImport:
    @pytest.mark.asyncio
    async def test_branded_row_builds_name_and_prefixes_code(self, store):
        result = await colors(store).import_csv("Bambu Lab,Black,000000\n")

        assert result.created == 1
        assert store.rows[0]["name"] == "Black (Bambu Lab)"
        assert store.rows[0]["code"] == "#000000"

    @pytest.mark.asyncio
    async def test_two_field_row(self, store):
        result = await colors(store).import_csv("Red,#FF0000\n")

        assert result.created == 1
        assert store.rows[0] == {"id": 1, "name": "Red", "code": "#FF0000"}

    @pytest.mark.asyncio
    async def test_branded_header(self, store):
        content = "brand,colorName,hexCode\nBambu Lab,Black,000000\n"

        result = await colors(store).import_csv(content)

        assert result.created == 1
        assert store.rows[0]["name"] == "Black (Bambu Lab)"

    @pytest.mark.asyncio
    async def test_single_field_row_is_malformed(self, store):
        result = await colors(store).import_csv("Red\n")

        assert result.errors == 1
        assert result.issues[0].reason == "Malformed row"

    @pytest.mark.asyncio
    async def test_invalid_hex_code_fails_validation(self, store):
        result = await colors(store).import_csv("Red,zzz\n")

        assert result.created == 0
        assert result.errors == 1
        assert result.issues[0].reason.startswith("code:")

    @pytest.mark.asyncio
    async def test_same_name_with_other_code_is_not_a_duplicate(self, store):
        result = await colors(store).import_csv("Red,#FF0000\nRed,#EE0000\nred,ff0000\n")

        assert (result.created, result.duplicates) == (2, 1)

    @pytest.mark.asyncio
    async def test_code_in_first_row_does_not_make_it_a_header(self, store):
        result = await colors(store).import_csv("Barcode Blue,#0000FF\nRed,#FF0000\n")

        assert (result.created, result.duplicates, result.errors) == (2, 0, 0)
        assert store.rows[0]["name"] == "Barcode Blue"

    @pytest.mark.asyncio
    async def test_json_branded_object(self, store):
        items = [{"brand": "Prusament", "colorName": "Galaxy Black", "hexCode": "1a1a1a"}]

        result = await colors(store).import_json(items)

        assert result.created == 1
        assert store.rows[0]["name"] == "Galaxy Black (Prusament)"
        assert store.rows[0]["code"] == "#1a1a1a"


# ====================================================================
# Other lookup lists
# ====================================================================


class TestCatalogCsvImport:
    @pytest.mark.asyncio
    async def test_headerless_diameters(self, store):
        spec = CATALOG_IMPORT_SPECS[CatalogKind.diameter]

        result = await pipeline_for(spec, store).import_csv("1.75\n2.85\n1.75\n")

        assert (result.created, result.duplicates, result.errors) == (2, 1, 0)
        assert [row["value"] for row in store.rows] == ["1.75", "2.85"]

    @pytest.mark.asyncio
    async def test_diameter_header_and_invalid_value(self, store):
        spec = CATALOG_IMPORT_SPECS[CatalogKind.diameter]

        result = await pipeline_for(spec, store).import_csv("Value\n3.00\nthick\n-1\n")

        assert (result.created, result.errors) == (1, 2)
        assert [issue.row for issue in result.issues] == [3, 4]
        assert store.rows[0]["value"] == "3.00"

    @pytest.mark.asyncio
    async def test_material_type_header(self, store):
        spec = CATALOG_IMPORT_SPECS[CatalogKind.material]

        result = await pipeline_for(spec, store).import_csv("Notes,Type\nbasic,PLA\ntough,PETG\n")

        assert result.created == 2
        assert [row["name"] for row in store.rows] == ["PLA", "PETG"]

    @pytest.mark.asyncio
    async def test_storage_locations(self, store):
        spec = CATALOG_IMPORT_SPECS[CatalogKind.storage_location]
        content = "Name\nShelf A\nDry Box\nshelf a\n"

        result = await pipeline_for(spec, store).import_csv(content)

        assert (result.created, result.duplicates, result.errors) == (2, 1, 0)

    @pytest.mark.asyncio
    async def test_unicode_separators_stay_inside_a_row(self, store):
        result = await manufacturers(store).import_csv("Acme\x85Corp\nOther\n")

        assert result.created == 2
        assert store.rows[0]["name"] == "Acme\x85Corp"


# ====================================================================
# JSON and filaments
# ====================================================================


class TestJsonImport:
    @pytest.mark.asyncio
    async def test_mixed_items(self, store):
        items = [{"name": "Prusament"}, "oops", {"name": "  "}, {"name": "prusament"}]

        result = await manufacturers(store).import_json(items)

        assert (result.created, result.duplicates, result.errors) == (1, 1, 2)
        assert [issue.row for issue in result.issues] == [2, 3, 4]

    def test_load_json_array_rejects_invalid_json(self):
        with pytest.raises(ValidationError):
            load_json_array("[{")

    def test_load_json_array_rejects_non_array(self):
        with pytest.raises(ValidationError, match="Expected an array"):
            load_json_array(json.dumps({"name": "PLA"}))


class TestFilamentImport:
    @pytest.mark.asyncio
    async def test_positional_row(self, store):
        content = "Benchy Red,Prusament,PLA,Red,#ff0000,1.75,215,1,80\n"

        result = await pipeline_for(FILAMENT_IMPORT_SPEC, store).import_csv(content)

        assert result.created == 1
        created = store.created[0]
        assert created.name == "Benchy Red"
        assert created.diameter == 1.75
        assert created.print_temp == "215"
        assert created.remaining_percentage == 80
        assert created.dryer_count == 0

    @pytest.mark.asyncio
    async def test_reordered_header(self, store):
        content = "material,name,colorName\nPETG,Sign Holder,Blue\n"

        result = await pipeline_for(FILAMENT_IMPORT_SPEC, store).import_csv(content)

        assert result.created == 1
        created = store.created[0]
        assert (created.name, created.material, created.color_name) == (
            "Sign Holder",
            "PETG",
            "Blue",
        )

    @pytest.mark.asyncio
    async def test_json_missing_color_name(self, store):
        items = [
            {"name": "A", "material": "PLA", "colorName": "Red", "totalWeight": 0.75},
            {"name": "B", "material": "PLA"},
        ]

        result = await pipeline_for(FILAMENT_IMPORT_SPEC, store).import_json(items)

        assert (result.created, result.errors) == (1, 1)
        assert "color_name" in result.issues[0].reason
        assert store.created[0].total_weight == 0.75

    @pytest.mark.asyncio
    async def test_out_of_range_value_is_an_error(self, store):
        content = "Spool,,PLA,Red,,,,1,150\n"

        result = await pipeline_for(FILAMENT_IMPORT_SPEC, store).import_csv(content)

        assert result.errors == 1
        assert "remaining" in result.issues[0].reason.lower()
