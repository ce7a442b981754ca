import unittest
from types import MappingProxyType

from resource_manager.core.models import ExtractionResult
from resource_manager.fetch.extractors import KeyedExtractor, from_mapping


class TestKeyedExtractor(unittest.TestCase):
    """Default extractor and its degradation on partial responses."""

    def test_reads_records_and_pagination(self):
        result = KeyedExtractor()({
            "data": [{"id": 1}, {"id": 2}],
            "pagination": {"total": 12, "currentPage": 2, "totalPages": 6},
        })
        self.assertEqual(result, ExtractionResult(
            records=[{"id": 1}, {"id": 2}], total_results=12, current_page=2, total_pages=6,
        ))

    def test_missing_pagination_degrades_to_unknown(self):
        result = KeyedExtractor()({"data": [{"id": 1}]})
        self.assertEqual(result.records, [{"id": 1}])
        self.assertIsNone(result.total_results)
        self.assertIsNone(result.current_page)
        self.assertIsNone(result.total_pages)

    def test_missing_or_null_records_degrade_to_empty(self):
        self.assertEqual(KeyedExtractor()({}).records, [])
        self.assertEqual(KeyedExtractor()({"data": None}).records, [])
        self.assertEqual(KeyedExtractor()(None).records, [])
        self.assertEqual(KeyedExtractor()({"data": {"not": "a list"}}).records, [])

    def test_non_dict_mapping_response(self):
        response = MappingProxyType({
            "data": [{"id": 1}],
            "pagination": MappingProxyType({"totalPages": 2}),
        })
        result = KeyedExtractor()(response)
        self.assertEqual(result.records, [{"id": 1}])
        self.assertEqual(result.total_pages, 2)

    def test_dotted_data_key(self):
        result = KeyedExtractor("result.items")({"result": {"items": [1, 2]}})
        self.assertEqual(result.records, [1, 2])

    def test_numeric_strings_are_coerced_and_garbage_ignored(self):
        result = KeyedExtractor()({"data": [], "pagination": {"totalPages": "4", "total": "n/a"}})
        self.assertEqual(result.total_pages, 4)
        self.assertIsNone(result.total_results)


class TestFromMapping(unittest.TestCase):

    def test_accepts_camel_case_dict(self):
        extract = from_mapping(lambda res: {
            "data": res["users"],
            "totalResults": res["totalCount"],
            "currentPage": res["page"],
            "totalPages": res["totalPages"],
        })
        result = extract({"users": [{"id": 1}], "totalCount": 1, "page": 1, "totalPages": 1})
        self.assertEqual(result.records, [{"id": 1}])
        self.assertEqual(result.total_results, 1)
        self.assertEqual(result.total_pages, 1)

    def test_accepts_snake_case_dict(self):
        extract = from_mapping(lambda res: {"records": res, "total_pages": 3})
        result = extract([{"id": 1}])
        self.assertEqual(result.records, [{"id": 1}])
        self.assertEqual(result.total_pages, 3)
        self.assertIsNone(result.current_page)


if __name__ == "__main__":
    unittest.main()
