"""
Tests for naming conventions — module name validation and case conversion.
"""

import pytest

from crudgen.core.services.naming import (
    module_naming,
    to_camel_case,
    to_constant_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
    validate_module_name,
)


class TestValidateModuleName:
    """Tests for validate_module_name()."""

    @pytest.mark.parametrize("name", ["todo", "blog-post", "user_profile", "_internal", "Api2"])
    def test_valid(self, name: str):
        assert validate_module_name(name) == name

    def test_trims(self):
        assert validate_module_name("  todo  ") == "todo"

    @pytest.mark.parametrize("name,message", [
        ("", "cannot be empty"),
        ("   ", "cannot be empty"),
        ("blog post", "only contain"),
        ("todo!", "only contain"),
        ("2fast", "must start with"),
        ("-dash", "must start with"),
    ])
    def test_invalid(self, name: str, message: str):
        with pytest.raises(ValueError, match=message):
            validate_module_name(name)


class TestCaseConversion:
    """Tests for the to_*_case helpers."""

    @pytest.mark.parametrize("name,camel,pascal,kebab,snake", [
        ("todo", "todo", "Todo", "todo", "todo"),
        ("blog-post", "blogPost", "BlogPost", "blog-post", "blog_post"),
        ("user_profile", "userProfile", "UserProfile", "user-profile", "user_profile"),
        ("orderItem", "orderItem", "OrderItem", "order-item", "order_item"),
        ("Api2", "api2", "Api2", "api2", "api2"),
    ])
    def test_conversions(self, name: str, camel: str, pascal: str, kebab: str, snake: str):
        assert to_camel_case(name) == camel
        assert to_pascal_case(name) == pascal
        assert to_kebab_case(name) == kebab
        assert to_snake_case(name) == snake

    def test_constant(self):
        assert to_constant_case("blog-post") == "BLOG_POST"

    def test_empty(self):
        assert to_camel_case("") == ""


class TestModuleNaming:
    """Tests for module_naming()."""

    def test_all_variants(self):
        naming = module_naming("blog-post")
        assert naming.original == "blog-post"
        assert naming.directory == "blog-post"
        assert naming.file == "blogPost"
        assert naming.cls == "BlogPost"
        assert naming.variable == "blogPost"
        assert naming.constant == "BLOG_POST"
        assert naming.url == "blog-post"
