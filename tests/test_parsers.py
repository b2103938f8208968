"""
Parser tests — comment stripping, block scanning, attribute extraction and
directory walking.
"""
import os

import pytest

from tfscan.models.resource import Provider

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


# --------------------------------------------------------- Comment stripper
class TestCommentStripper:
    def setup_method(self):
        from tfscan.parsers import scanner
        self.scanner = scanner

    def test_hash_comment_blanked(self):
        out = self.scanner.strip_comments('a = 1 # note\nb = 2\n')
        assert out == 'a = 1       \nb = 2\n'

    def test_double_slash_comment_blanked(self):
        out = self.scanner.strip_comments('// header\nx = 1')
        assert out == '         \nx = 1'

    def test_block_comment_keeps_newlines(self):
        src = 'a = 1\n/* one\ntwo */\nb = 2'
        out = self.scanner.strip_comments(src)
        assert len(out) == len(src)
        assert out.count("\n") == src.count("\n")
        assert "one" not in out and "two" not in out
        assert out.endswith("b = 2")

    def test_comment_markers_inside_strings_untouched(self):
        src = 'url = "http://example.com/#anchor"\n'
        assert self.scanner.strip_comments(src) == src

    def test_escaped_quote_does_not_end_string(self):
        src = 'v = "say \\"hi\\" # not a comment"\n'
        assert self.scanner.strip_comments(src) == src

    def test_double_backslash_before_quote_ends_string(self):
        src = 'p = "C:\\\\" # comment\n'
        out = self.scanner.strip_comments(src)
        assert "comment" not in out
        assert out.startswith('p = "C:\\\\"')

    def test_unterminated_block_comment_truncates(self):
        out = self.scanner.strip_comments('a = 1\n/* never closed\nb = 2')
        assert out == 'a = 1\n'

    def test_trailing_comment_without_newline(self):
        assert self.scanner.strip_comments('x = 1 # end') == 'x = 1      '

    def test_empty_input(self):
        assert self.scanner.strip_comments("") == ""


# --------------------------------------------------------- Brace extractor
class TestBraceExtractor:
    def setup_method(self):
        from tfscan.parsers import scanner
        self.scanner = scanner

    def test_simple_body(self):
        assert self.scanner.extract_block("{ a = 1 }", 0) == " a = 1 "

    def test_nested_braces(self):
        text = "x { a { b { } } } tail"
        assert self.scanner.extract_block(text, 2) == " a { b { } } "

    def test_brace_inside_string_ignored(self):
        text = '{ s = "}{" }'
        assert self.scanner.extract_block(text, 0) == ' s = "}{" '

    def test_unbalanced_returns_none(self):
        assert self.scanner.extract_block("{ a { }", 0) is None

    def test_requires_opening_brace(self):
        assert self.scanner.extract_block("a { }", 0) is None
        assert self.scanner.extract_block("{}", 5) is None


# --------------------------------------------------------- Block scanner
class TestResourceBlockScanner:
    def setup_method(self):
        from tfscan.parsers import scanner
        self.scanner = scanner

    def test_finds_blocks_in_order(self):
        text = 'resource "a_x" "one" {}\nresource "b_y" "two" {\n}\n'
        blocks = self.scanner.find_resource_blocks(text)
        assert [(b.resource_type, b.resource_name) for b in blocks] == [
            ("a_x", "one"),
            ("b_y", "two"),
        ]
        assert [b.line for b in blocks] == [1, 2]

    def test_identifier_containing_keyword_rejected(self):
        text = 'my_resource "a" "b" {}\nresource_group = "x"\n'
        assert self.scanner.find_resource_blocks(text) == []

    def test_malformed_header_skipped(self):
        text = 'resource "only_one_label" {}\nresource "t" "n" { k = "v" }'
        blocks = self.scanner.find_resource_blocks(text)
        assert len(blocks) == 1
        assert blocks[0].resource_name == "n"

    def test_unbalanced_block_skipped_without_aborting(self):
        text = 'resource "t" "broken" {\n  a {\n'
        assert self.scanner.find_resource_blocks(text) == []

    def test_scan_resumes_after_unbalanced_block(self):
        text = 'resource "t" "broken" {\n  a {\n}\nresource "aws_vpc" "ok" { cidr = "x" }\n'
        blocks = self.scanner.find_resource_blocks(text)
        assert [b.resource_name for b in blocks] == ["ok"]
        assert blocks[0].line == 4

    def test_line_numbers_across_many_blocks(self):
        block = 'resource "aws_instance" "web_{}" {{\n  ami = "ami-1"\n  instance_type = "t3.micro"\n}}\n\n'
        count = 2000
        text = "".join(block.format(i) for i in range(count))
        blocks = self.scanner.find_resource_blocks(text)
        assert len(blocks) == count
        assert blocks[0].line == 1
        assert blocks[1].line == 6
        assert blocks[-1].resource_name == f"web_{count - 1}"
        assert blocks[-1].line == 5 * (count - 1) + 1

    def test_body_offsets(self):
        text = 'resource "t" "n" { k = 1 }'
        block = self.scanner.find_resource_blocks(text)[0]
        assert block.body == " k = 1 "
        assert text[block.body_start:block.body_start + len(block.body)] == block.body

    def test_keyword_inside_body_not_parsed_twice(self):
        text = 'resource "t" "outer" {\n  note = "x"\n  resource "t" "inner" {}\n}\n'
        blocks = self.scanner.find_resource_blocks(text)
        assert [b.resource_name for b in blocks] == ["outer"]


# --------------------------------------------------------- Attribute extractor
class TestAttributeExtractor:
    def setup_method(self):
        from tfscan.parsers import attributes
        self.parse = attributes.parse_attributes

    def test_scalar_kinds(self):
        attrs = self.parse('\n  name = "web"\n  count = 3\n  ratio = 0.5\n  enabled = true\n  debug = false\n')
        assert attrs == {"name": "web", "count": 3, "ratio": 0.5, "enabled": True, "debug": False}
        assert isinstance(attrs["count"], int)
        assert isinstance(attrs["ratio"], float)

    def test_nested_block_flattened(self):
        attrs = self.parse('\n  root_block_device {\n    volume_size = 50\n  }\n')
        assert attrs == {"root_block_device.volume_size": 50}

    def test_single_line_nested_block(self):
        attrs = self.parse(" root_block_device { volume_size = 50 } ")
        assert attrs == {"root_block_device.volume_size": 50}

    def test_two_level_nesting(self):
        body = '\n  boot_disk {\n    initialize_params {\n      size = 20\n    }\n  }\n'
        assert self.parse(body) == {"boot_disk.initialize_params.size": 20}

    def test_nested_leaves_do_not_leak_to_outer_level(self):
        body = '\n  a = 1\n  inner {\n    b = 2\n  }\n'
        attrs = self.parse(body)
        assert "b" not in attrs
        assert "inner" not in attrs
        assert attrs == {"a": 1, "inner.b": 2}

    def test_map_literal_omitted(self):
        attrs = self.parse('\n  tags = {\n    Name = "web"\n  }\n  x = 1\n')
        assert attrs == {"x": 1}

    def test_unsupported_shapes_omitted(self):
        body = (
            '\n  list = ["a", "b"]\n'
            '  ref = aws_vpc.main.id\n'
            '  fn = lookup(var.m, "k")\n'
            '  neg = -4\n'
        )
        assert self.parse(body) == {"neg": -4}

    def test_escaped_quotes_kept_verbatim(self):
        attrs = self.parse('\n  msg = "say \\"hi\\""\n')
        assert attrs == {"msg": 'say \\"hi\\"'}

    def test_later_pass_wins_over_text_order(self):
        # number pass runs after the string pass regardless of line order
        attrs = self.parse('\n  size = 10\n  size = "large"\n')
        assert attrs == {"size": 10}

    def test_same_kind_last_line_wins(self):
        attrs = self.parse('\n  name = "a"\n  name = "b"\n')
        assert attrs == {"name": "b"}

    def test_empty_body(self):
        assert self.parse("") == {}


# --------------------------------------------------------- Provider classifier
class TestProviderClassifier:
    def setup_method(self):
        from tfscan.parsers import terraform
        self.infer = terraform.infer_provider

    @pytest.mark.parametrize("resource_type,expected", [
        ("aws_instance", Provider.AWS),
        ("google_compute_instance", Provider.GCP),
        ("azurerm_virtual_machine", Provider.AZURE),
        ("random_string", Provider.UNKNOWN),
        ("awsx_thing", Provider.UNKNOWN),
    ])
    def test_prefixes(self, resource_type, expected):
        assert self.infer(resource_type) == expected

    def test_provider_serializes_as_plain_string(self):
        assert self.infer("aws_instance").value == "aws"


# --------------------------------------------------------- Terraform parser
class TestTerraformParser:
    def setup_method(self):
        from tfscan.parsers import terraform
        self.parser = terraform

    def test_single_resource(self):
        resources = self.parser.parse_content('resource "T" "N" { k = "v" }')
        assert len(resources) == 1
        r = resources[0]
        assert r.resource_type == "T"
        assert r.resource_name == "N"
        assert r.attributes == {"k": "v"}
        assert r.provider == Provider.UNKNOWN

    def test_empty_input(self):
        assert self.parser.parse_content("") == []

    def test_no_resources(self):
        assert self.parser.parse_content('variable "x" {\n  default = 1\n}\n') == []

    def test_valid_block_after_unbalanced_one(self):
        src = 'resource "t" "broken" {\n  a {\n}\nresource "aws_vpc" "ok" { cidr = "x" }\n'
        resources = self.parser.parse_content(src)
        assert [(r.resource_name, r.attributes) for r in resources] == [("ok", {"cidr": "x"})]
        assert resources[0].provider == Provider.AWS

    def test_commented_out_duplicate_ignored(self):
        src = (
            'resource "aws_instance" "web" {\n'
            '  instance_type = "t3.micro"\n'
            '  # instance_type = "m5.large"\n'
            '  // instance_type = "c5.large"\n'
            '  /* instance_type = "r5.large" */\n'
            '}\n'
        )
        r = self.parser.parse_content(src)[0]
        assert r.attributes == {"instance_type": "t3.micro"}

    def test_inline_comment_after_value(self):
        r = self.parser.parse_content('resource "aws_instance" "web" {\n  ami = "ami-1" # pinned\n}\n')[0]
        assert r.attributes == {"ami": "ami-1"}

    def test_aws_fixture(self):
        resources = self.parser.parse_file(os.path.join(FIXTURES, "aws_stack.tf"))
        names = [r.qualified_name for r in resources]
        assert names == [
            "aws_instance.web",
            "aws_db_instance.main",
            "aws_s3_bucket.assets",
            "aws_nat_gateway.nat",
            "aws_eip.nat",
            "aws_subnet.public",
            "aws_vpc.main",
            "random_string.suffix",
        ]

    def test_aws_fixture_attributes(self):
        resources = self.parser.parse_file(os.path.join(FIXTURES, "aws_stack.tf"))
        web = resources[0]
        assert web.attributes == {
            "ami": "ami-0c55b159cbfafe1f0",
            "instance_type": "t3.large",
            "monitoring": True,
            "root_block_device.volume_size": 50,
            "root_block_device.volume_type": "gp3",
            "root_block_device.encrypted": True,
        }
        assert web.line == 11
        assert web.source_file.endswith("aws_stack.tf")

    def test_brace_inside_string_value(self):
        resources = self.parser.parse_file(os.path.join(FIXTURES, "aws_stack.tf"))
        db = next(r for r in resources if r.resource_type == "aws_db_instance")
        assert db.attributes["password"] == "p@ss{word}"
        assert db.attributes["multi_az"] is True
        assert db.attributes["allocated_storage"] == 100

    def test_commented_block_not_parsed(self):
        resources = self.parser.parse_file(os.path.join(FIXTURES, "aws_stack.tf"))
        assert all(r.resource_name != "legacy" for r in resources)

    def test_provider_assignment(self):
        for fname, expected in (
            ("gcp_stack.tf", Provider.GCP),
            ("azure_stack.tf", Provider.AZURE),
        ):
            resources = self.parser.parse_file(os.path.join(FIXTURES, fname))
            assert resources
            for r in resources:
                assert r.provider == expected, f"{r.resource_type} -> {r.provider}"

    def test_gcp_deep_nesting(self):
        resources = self.parser.parse_file(os.path.join(FIXTURES, "gcp_stack.tf"))
        app = resources[0]
        assert app.attributes["boot_disk.initialize_params.size"] == 20
        assert app.attributes["boot_disk.initialize_params.image"] == "debian-cloud/debian-12"

    def test_references_are_absent(self):
        resources = self.parser.parse_file(os.path.join(FIXTURES, "azure_stack.tf"))
        vm = next(r for r in resources if r.resource_name == "vm")
        assert "resource_group_name" not in vm.attributes
        assert vm.attributes["os_disk.caching"] == "ReadWrite"

    def test_to_dict_is_json_friendly(self):
        import json
        r = self.parser.parse_content('resource "aws_s3_bucket" "b" {\n  bucket = "x"\n}')[0]
        data = json.loads(json.dumps(r.to_dict()))
        assert data["provider"] == "aws"
        assert data["attributes"] == {"bucket": "x"}

    def test_unreadable_file_returns_empty(self):
        assert self.parser.parse_file("/nonexistent/path/main.tf") == []


# --------------------------------------------------------- Directory walker
class TestDirectoryWalker:
    def setup_method(self):
        from tfscan.parsers import terraform
        self.parser = terraform

    def test_main_tf_and_readme(self, tmp_path):
        (tmp_path / "main.tf").write_text('resource "aws_s3_bucket" "data" { bucket = "my-bucket" }')
        (tmp_path / "README.md").write_text('resource "aws_s3_bucket" "doc" { bucket = "nope" }')
        resources = self.parser.parse_directory(str(tmp_path))
        assert len(resources) == 1
        r = resources[0]
        assert (r.resource_type, r.resource_name, r.provider) == ("aws_s3_bucket", "data", Provider.AWS)
        assert r.attributes == {"bucket": "my-bucket"}

    def test_no_tf_files(self, tmp_path):
        (tmp_path / "notes.txt").write_text("hello")
        assert self.parser.parse_directory(str(tmp_path)) == []

    def test_empty_directory(self, tmp_path):
        assert self.parser.parse_directory(str(tmp_path)) == []

    def test_not_recursive(self, tmp_path):
        sub = tmp_path / "modules"
        sub.mkdir()
        (sub / "nested.tf").write_text('resource "aws_vpc" "nested" {}')
        (tmp_path / "main.tf").write_text('resource "aws_vpc" "top" {}')
        names = [r.resource_name for r in self.parser.parse_directory(str(tmp_path))]
        assert names == ["top"]

    def test_directory_named_like_tf_file_ignored(self, tmp_path):
        (tmp_path / "legacy.tf").mkdir()
        (tmp_path / "main.tf").write_text('resource "aws_vpc" "top" {}')
        resources, skipped = self.parser.scan_directory(str(tmp_path))
        assert [r.resource_name for r in resources] == ["top"]
        assert skipped == []

    def test_files_concatenated_in_name_order(self, tmp_path):
        (tmp_path / "b.tf").write_text('resource "aws_vpc" "from_b" {}')
        (tmp_path / "a.tf").write_text('resource "aws_vpc" "from_a" {}\nresource "aws_vpc" "from_a2" {}')
        names = [r.resource_name for r in self.parser.parse_directory(str(tmp_path))]
        assert names == ["from_a", "from_a2", "from_b"]

    def test_duplicates_across_files_kept(self, tmp_path):
        (tmp_path / "a.tf").write_text('resource "aws_vpc" "main" {}')
        (tmp_path / "b.tf").write_text('resource "aws_vpc" "main" {}')
        assert len(self.parser.parse_directory(str(tmp_path))) == 2

    def test_bad_encoding_skipped_and_reported(self, tmp_path):
        (tmp_path / "bad.tf").write_bytes(b'resource "aws_vpc" "x" { name = "\xff\xfe" }')
        (tmp_path / "good.tf").write_text('resource "aws_vpc" "ok" {}')
        resources, skipped = self.parser.scan_directory(str(tmp_path))
        assert [r.resource_name for r in resources] == ["ok"]
        assert skipped == [str(tmp_path / "bad.tf")]

    def test_parse_directory_hides_skipped_files(self, tmp_path):
        # Callers of parse_directory cannot tell a skipped file from an empty one;
        # scan_directory is the variant that reports them.
        (tmp_path / "bad.tf").write_bytes(b"\xff\xfe\xfd")
        assert self.parser.parse_directory(str(tmp_path)) == []

    def test_single_file_path(self, tmp_path):
        f = tmp_path / "main.tf"
        f.write_text('resource "google_storage_bucket" "b" {}')
        resources = self.parser.parse_directory(str(f))
        assert [r.provider for r in resources] == [Provider.GCP]

    def test_missing_directory(self, tmp_path):
        assert self.parser.parse_directory(str(tmp_path / "missing")) == []
