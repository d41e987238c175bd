"""Tests for substring_packing.encoding — JSON documents and file helpers."""
from __future__ import annotations

import orjson
import pytest

from substring_packing import encoding
from substring_packing.builder import Builder
from substring_packing.errors import ConversionError, DecodeError, EncodingError, IoError

STRINGS = ["cat", "cats", "category", "application", "cationary", "日本語", "本"]


class TestSubStrDocument:
    def test_round_trip(self) -> None:
        substr = Builder(STRINGS).build()
        loaded = encoding.loads_substr(encoding.dumps_substr(substr))
        assert loaded == substr
        assert list(loaded) == STRINGS

    def test_document_shape(self) -> None:
        document = orjson.loads(encoding.dumps_substr(Builder(["cat", "cats"]).build()))
        assert document == {"format": "substr", "version": 1, "spans": [[0, 3], [0, 4]], "string": "cats"}

    def test_invalid_json(self) -> None:
        with pytest.raises(EncodingError):
            encoding.loads_substr(b"not json")

    def test_wrong_format(self) -> None:
        data = encoding.dumps_builder(Builder(["a"]))
        with pytest.raises(EncodingError):
            encoding.loads_substr(data)

    def test_wrong_version(self) -> None:
        data = orjson.dumps({"format": "substr", "version": 99, "spans": [], "string": ""})
        with pytest.raises(EncodingError):
            encoding.loads_substr(data)

    def test_span_starts_inside_a_character(self) -> None:
        data = orjson.dumps({"format": "substr", "version": 1, "spans": [[1, 1]], "string": "é"})
        with pytest.raises(DecodeError):
            encoding.loads_substr(data)

    def test_span_ends_inside_a_character(self) -> None:
        data = orjson.dumps({"format": "substr", "version": 1, "spans": [[0, 1]], "string": "é"})
        with pytest.raises(DecodeError):
            encoding.loads_substr(data)

    def test_span_outside_storage(self) -> None:
        data = orjson.dumps({"format": "substr", "version": 1, "spans": [[2, 3]], "string": "cats"})
        with pytest.raises(ConversionError):
            encoding.loads_substr(data)

    def test_length_does_not_fit(self) -> None:
        data = orjson.dumps({"format": "substr", "version": 1, "spans": [[0, 300]], "string": "a" * 300})
        with pytest.raises(ConversionError):
            encoding.loads_substr(data)

    def test_malformed_span(self) -> None:
        data = orjson.dumps({"format": "substr", "version": 1, "spans": [[0]], "string": "a"})
        with pytest.raises(EncodingError):
            encoding.loads_substr(data)


class TestBuilderDocument:
    def test_round_trip_keeps_state(self) -> None:
        builder = Builder(STRINGS)
        builder.build_only()
        loaded = encoding.loads_builder(encoding.dumps_builder(builder))
        assert loaded.vec == builder.vec
        assert loaded.contained_in == builder.contained_in
        assert loaded.spans == builder.spans
        assert loaded.index_string == builder.index_string
        assert loaded.built
        assert loaded.stats() == builder.stats()

    def test_loaded_builder_is_not_rebuilt(self) -> None:
        builder = Builder(STRINGS)
        builder.build_only()
        loaded = encoding.loads_builder(encoding.dumps_builder(builder))
        assert loaded.verify()
        assert loaded.build() == builder.build()

    def test_unbuilt_state(self) -> None:
        loaded = encoding.loads_builder(encoding.dumps_builder(Builder(["cat", "cats"])))
        assert not loaded.built
        assert loaded.spans == [None, None]
        assert loaded.build().string == b"cats"

    def test_container_out_of_range(self) -> None:
        document = orjson.loads(encoding.dumps_builder(Builder(["cat", "cats"])))
        document["contained_in"] = [[5, 0], None]
        with pytest.raises(ConversionError):
            encoding.loads_builder(orjson.dumps(document))

    def test_built_state_with_unresolved_span(self) -> None:
        builder = Builder(["cat", "cats"])
        builder.build_only()
        document = orjson.loads(encoding.dumps_builder(builder))
        document["spans"][0] = None
        with pytest.raises(EncodingError):
            encoding.loads_builder(orjson.dumps(document))

    def test_unbuilt_state_with_storage(self) -> None:
        document = orjson.loads(encoding.dumps_builder(Builder(["cat", "cats"])))
        document["index_string"] = "cats"
        with pytest.raises(EncodingError):
            encoding.loads_builder(orjson.dumps(document))

    def test_builder_span_splits_a_character(self) -> None:
        builder = Builder(["é", "aé"])
        builder.build_only()
        document = orjson.loads(encoding.dumps_builder(builder))
        document["spans"][0] = [2, 1]
        with pytest.raises(DecodeError):
            encoding.loads_builder(orjson.dumps(document))

    @pytest.mark.parametrize(
        "key, value",
        [
            ("vec", ["cat", 7]),
            ("chained", ["1"]),
            ("chained", [5]),
            ("loose", {"ids": [0]}),
        ],
    )
    def test_malformed_fields(self, key, value) -> None:
        document = orjson.loads(encoding.dumps_builder(Builder(["cat", "cats"])))
        document[key] = value
        with pytest.raises(EncodingError):
            encoding.loads_builder(orjson.dumps(document))

    def test_table_size_mismatch(self) -> None:
        document = orjson.loads(encoding.dumps_builder(Builder(["cat", "cats"])))
        document["spans"] = [None]
        with pytest.raises(EncodingError):
            encoding.loads_builder(orjson.dumps(document))


class TestFiles:
    def test_save_and_load(self, tmp_path) -> None:
        builder = Builder(STRINGS)
        builder.build_only()
        substr = builder.build()
        encoding.save(tmp_path / "packed.json", substr)
        encoding.save(tmp_path / "state.json", builder)
        assert encoding.load_substr(tmp_path / "packed.json") == substr
        assert encoding.load_builder(tmp_path / "state.json").verify()

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(IoError):
            encoding.load_substr(tmp_path / "missing.json")
