"""
Chip catalog tests.

Covers name lookup, the flash-size override of ROM regions, and sanity
checks over the shipped basic/expert data sets.
"""
import json

import pytest

from espsegs.chips.catalog import (
    CatalogError,
    Region,
    UnknownChipError,
    find_chip,
    list_chips,
    load_catalog,
    normalize_chip_name,
    parse_catalog,
    read_catalog_file,
)
from espsegs.config import CATALOGS, MB


class TestLookup:
    def test_normalize(self):
        assert normalize_chip_name("ESP32-S3") == "esp32s3"
        assert normalize_chip_name("esp-32-c3") == "esp32c3"

    @pytest.mark.parametrize("name", ["esp32-s3", "ESP32S3", "Esp32-S3", "esp32s3"])
    def test_case_and_hyphen_insensitive(self, name):
        assert find_chip(name).name == "ESP32-S3"

    def test_spellings_give_same_entry(self):
        assert find_chip("esp32-s3") is find_chip("ESP32S3")

    def test_unknown_chip(self):
        with pytest.raises(UnknownChipError) as exc:
            find_chip("ESP99")
        assert exc.value.name == "ESP99"

    def test_esp32_does_not_match_variants(self):
        assert find_chip("esp32").name == "ESP32"

    def test_unknown_catalog(self):
        with pytest.raises(CatalogError):
            load_catalog("deluxe")

    def test_expert_catalog_is_finer(self):
        basic = find_chip("esp32", "basic")
        expert = find_chip("esp32", "expert")
        assert len(expert.regions) > len(basic.regions)


class TestRegion:
    def test_rom_class_by_name(self):
        assert Region(0, "IROM", 0, 1).is_rom
        assert Region(0, "DROM", 0, 1).is_rom
        assert not Region(0, "DRAM", 0, 1).is_rom
        assert not Region(0, "ROM_TABLE", 0, 1).is_rom

    def test_flash_size_resizes_rom(self):
        irom = Region(3, "IROM", 0x400D0000, 4 * MB)
        assert irom.end() == 0x400D0000 + 4 * MB
        assert irom.end(16 * MB) == 0x400D0000 + 16 * MB

    def test_flash_size_ignored_for_ram(self):
        dram = Region(0, "DRAM", 0x3FFB0000, 176 * 1024)
        assert dram.end(16 * MB) == dram.end() == 0x3FFB0000 + 176 * 1024


class TestShippedData:
    @pytest.mark.parametrize("catalog", CATALOGS)
    def test_same_chips_in_every_catalog(self, catalog):
        names = [c.name for c in list_chips(catalog)]
        assert names == [c.name for c in list_chips("basic")]
        assert "ESP32" in names and "ESP32-C3" in names

    @pytest.mark.parametrize("catalog", CATALOGS)
    def test_regions_do_not_overlap(self, catalog):
        for chip in list_chips(catalog):
            spans = sorted((r.start, r.end()) for r in chip.regions)
            for (_, end), (start, _) in zip(spans, spans[1:]):
                assert end <= start, chip.name

    @pytest.mark.parametrize("catalog", CATALOGS)
    def test_rom_regions_come_last(self, catalog):
        # a large flash size stretches ROM windows over their neighbours;
        # first-match lookup stays correct only if RAM is listed first and
        # the ROM windows follow in descending address order
        for chip in list_chips(catalog):
            kinds = [r.is_rom for r in chip.regions]
            assert kinds == sorted(kinds), chip.name
            roms = [r.start for r in chip.regions if r.is_rom]
            assert roms == sorted(roms, reverse=True), chip.name

    @pytest.mark.parametrize("catalog", CATALOGS)
    def test_unique_region_ids(self, catalog):
        for chip in list_chips(catalog):
            ids = [r.id for r in chip.regions]
            assert len(ids) == len(set(ids))

    def test_esp32_basic_layout(self):
        regions = {r.name: r for r in find_chip("esp32").regions}
        assert regions["DRAM"].start == 0x3FFB0000
        assert regions["DRAM"].length == 176 * 1024
        assert regions["IRAM"].start == 0x40080000
        assert regions["IRAM"].length == 128 * 1024
        assert regions["IROM"].start == 0x400D0000
        assert regions["IROM"].length == 4 * MB
        assert regions["DROM"].start == 0x3F400000


class TestParse:
    def _doc(self, **region):
        base = {"id": 0, "name": "DRAM", "start": "0x1000", "length": "0x100"}
        base.update(region)
        return {"chips": [{"name": "X", "regions": [base]}]}

    def test_hex_and_int_values(self):
        (chip,) = parse_catalog(self._doc(length=256))
        assert chip.regions[0].start == 0x1000
        assert chip.regions[0].length == 256

    def test_missing_chips_list(self):
        with pytest.raises(CatalogError):
            parse_catalog({})

    def test_zero_length(self):
        with pytest.raises(CatalogError):
            parse_catalog(self._doc(length="0"))

    def test_bad_number(self):
        with pytest.raises(CatalogError):
            parse_catalog(self._doc(start="lots"))

    def test_missing_field(self):
        doc = self._doc()
        del doc["chips"][0]["regions"][0]["start"]
        with pytest.raises(CatalogError):
            parse_catalog(doc)

    def test_chip_without_regions(self):
        with pytest.raises(CatalogError):
            parse_catalog({"chips": [{"name": "X", "regions": []}]})

    def test_duplicate_ids(self):
        doc = self._doc()
        doc["chips"][0]["regions"].append({"id": 0, "name": "IRAM", "start": "0x2000", "length": "0x10"})
        with pytest.raises(CatalogError):
            parse_catalog(doc)

    def test_chips_not_a_list(self):
        with pytest.raises(CatalogError):
            parse_catalog({"chips": 5})

    def test_regions_not_a_list(self):
        with pytest.raises(CatalogError):
            parse_catalog({"chips": [{"name": "X", "regions": 5}]})

    def test_region_entry_not_an_object(self):
        with pytest.raises(CatalogError):
            parse_catalog({"chips": [{"name": "X", "regions": ["DRAM"]}]})


class TestReadFile:
    def test_valid_file(self, tmp_path):
        path = tmp_path / "mini.json"
        path.write_text(json.dumps({"chips": [{"name": "X", "regions": [
            {"id": 0, "name": "DRAM", "start": "0x1000", "length": "0x100"}]}]}), encoding="utf-8")
        (chip,) = read_catalog_file(path)
        assert chip.regions[0].end() == 0x1100

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError):
            read_catalog_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            read_catalog_file(tmp_path / "absent.json")
