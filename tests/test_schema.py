from openapi_llmtxt.parser.schema import SchemaKind, classify, composition_keyword, required_names, schema_type


class TestClassify:
    def test_ref_wins_over_siblings(self):
        node = {"$ref": "#/components/schemas/Pet", "type": "object", "properties": {"a": {}}}
        assert classify(node) is SchemaKind.REF

    def test_composition_before_object(self):
        assert classify({"type": "object", "oneOf": [{}]}) is SchemaKind.COMPOSITION

    def test_object_by_type_or_properties(self):
        assert classify({"type": "object"}) is SchemaKind.OBJECT
        assert classify({"properties": {"a": {"type": "string"}}}) is SchemaKind.OBJECT

    def test_empty_properties_without_type_is_empty(self):
        assert classify({"properties": {}}) is SchemaKind.EMPTY

    def test_array(self):
        assert classify({"type": "array", "items": {"type": "string"}}) is SchemaKind.ARRAY

    def test_primitive(self):
        assert classify({"type": "string", "enum": ["a"]}) is SchemaKind.PRIMITIVE

    def test_empty_and_non_mapping(self):
        assert classify({}) is SchemaKind.EMPTY
        assert classify(None) is SchemaKind.EMPTY
        assert classify("string") is SchemaKind.EMPTY


class TestHelpers:
    def test_composition_keyword_order(self):
        assert composition_keyword({"oneOf": [], "allOf": []}) == "allOf"
        assert composition_keyword({"anyOf": [], "oneOf": []}) == "anyOf"
        assert composition_keyword({"type": "string"}) is None

    def test_schema_type_list_form(self):
        assert schema_type({"type": ["null", "integer"]}) == "integer"
        assert schema_type({"type": ["null"]}) == "null"
        assert schema_type({"type": "boolean"}) == "boolean"
        assert schema_type({}) is None


class TestMalformedKeywords:
    def test_non_string_type_is_ignored(self):
        assert schema_type({"type": 5}) is None
        assert schema_type({"type": [5, "string"]}) == "string"
        assert schema_type({"type": [5]}) is None

    def test_required_names_only_accepts_lists(self):
        assert required_names({"required": ["a"]}) == ["a"]
        assert required_names({"required": True}) == []
        assert required_names({"required": "abc"}) == []
        assert required_names({}) == []
