"""Tests for actionmap.scanner.derive: per-class route derivation."""

from pathlib import Path

import pytest

from actionmap.config import (
    APP_ACTION,
    BASE_ACTION,
    EXCEL_RETURN,
    LIST_TYPE,
    MARKER_ANNOTATION,
    SYSTEM_ACTION,
    PathPrefix,
    ReturnTypeRule,
    ScanConfig,
    SuperclassPrefix,
    TypeMatch,
)
from actionmap.routing.route import HttpMethod
from actionmap.scanner.derive import (
    derive_routes,
    find_marker,
    return_type_prefix,
    select_prefix,
)
from actionmap.testing import FakeAnnotation, FakeClass, FakeFile, FakeIndex, FakeMethod, FakeType

MARKER = FakeAnnotation(MARKER_ANNOTATION)


def _marked(name: str, return_type: FakeType | None = None) -> FakeMethod:
    return FakeMethod(name, annotations=[MARKER], return_type=return_type)


@pytest.fixture
def index() -> FakeIndex:
    idx = FakeIndex()
    base = idx.add_external(BASE_ACTION)
    idx.add_external(APP_ACTION, superclass=base)
    idx.add_external(SYSTEM_ACTION, superclass=base)
    idx.add_external(LIST_TYPE)
    return idx


def _list_type(index: FakeIndex) -> FakeType:
    return FakeType("java.util.List<com.acme.User>", target=index.types[LIST_TYPE])


class TestDefaultPrefix:
    def test_order_action_path(self, index: FakeIndex) -> None:
        cls = index.add_class(
            "a.b.order.OrderAction",
            superclass=index.types[BASE_ACTION],
            methods=[_marked("list")],
        )
        routes = derive_routes(cls)
        assert [r.path for r in routes] == ["/order/rest/order/list"]

    def test_route_carries_sentinel_method_and_source(self, index: FakeIndex) -> None:
        method = _marked("save")
        cls = index.add_class("a.b.order.OrderAction", superclass=index.types[BASE_ACTION], methods=[method])
        (route,) = derive_routes(cls)
        assert route.method is HttpMethod.SUNBOX
        assert route.source is method

    def test_class_without_suffix(self, index: FakeIndex) -> None:
        cls = index.add_class(
            "com.acme.report.DailyReport",
            superclass=index.types[BASE_ACTION],
            methods=[_marked("run")],
        )
        assert derive_routes(cls)[0].path == "/report/rest/daily_report/run"


class TestSentinelSuperclass:
    @pytest.mark.parametrize("sentinel", [APP_ACTION, SYSTEM_ACTION])
    def test_json_prefix(self, index: FakeIndex, sentinel: str) -> None:
        cls = index.add_class(
            "com.acme.user.UserAction",
            superclass=index.types[sentinel],
            methods=[_marked("get")],
        )
        assert derive_routes(cls)[0].path == "/user/json/user/get"

    def test_indirect_sentinel_is_not_matched(self, index: FakeIndex) -> None:
        middle = index.add_class("com.acme.common.AuditAction", superclass=index.types[APP_ACTION])
        cls = index.add_class(
            "com.acme.user.UserAction",
            superclass=middle,
            methods=[_marked("get")],
        )
        assert derive_routes(cls)[0].path == "/user/rest/user/get"


class TestReturnTypeOverrides:
    def test_list_from_app_action_uses_jqgrid(self, index: FakeIndex) -> None:
        cls = index.add_class(
            "com.acme.user.UserAction",
            superclass=index.types[APP_ACTION],
            methods=[_marked("page", _list_type(index))],
        )
        assert derive_routes(cls)[0].path == "/user/jqGrid/user/page"

    def test_list_from_system_action_keeps_json(self, index: FakeIndex) -> None:
        cls = index.add_class(
            "com.acme.user.UserAction",
            superclass=index.types[SYSTEM_ACTION],
            methods=[_marked("page", _list_type(index))],
        )
        assert derive_routes(cls)[0].path == "/user/json/user/page"

    def test_list_from_plain_action_keeps_rest(self, index: FakeIndex) -> None:
        cls = index.add_class(
            "com.acme.user.UserAction",
            superclass=index.types[BASE_ACTION],
            methods=[_marked("page", _list_type(index))],
        )
        assert derive_routes(cls)[0].path == "/user/rest/user/page"

    @pytest.mark.parametrize("sentinel", [APP_ACTION, SYSTEM_ACTION])
    def test_excel_sentinel(self, index: FakeIndex, sentinel: str) -> None:
        cls = index.add_class(
            "com.acme.user.UserAction",
            superclass=index.types[sentinel],
            methods=[_marked("export", FakeType(EXCEL_RETURN))],
        )
        assert derive_routes(cls)[0].path == "/user/excel/user/export"

    def test_excel_applies_to_plain_action(self, index: FakeIndex) -> None:
        cls = index.add_class(
            "com.acme.user.UserAction",
            superclass=index.types[BASE_ACTION],
            methods=[_marked("export", FakeType(EXCEL_RETURN))],
        )
        assert derive_routes(cls)[0].path == "/user/excel/user/export"

    def test_unresolved_list_text_is_not_jqgrid(self, index: FakeIndex) -> None:
        cls = index.add_class(
            "com.acme.user.UserAction",
            superclass=index.types[APP_ACTION],
            methods=[_marked("page", FakeType("java.util.List"))],
        )
        assert derive_routes(cls)[0].path == "/user/json/user/page"

    def test_no_return_type(self, index: FakeIndex) -> None:
        assert return_type_prefix(None, APP_ACTION, ScanConfig()) is None


class TestMarkerPolicy:
    def test_unmarked_methods_skipped(self, index: FakeIndex) -> None:
        cls = index.add_class(
            "com.acme.user.UserAction",
            superclass=index.types[BASE_ACTION],
            methods=[FakeMethod("helper"), _marked("get")],
        )
        assert [r.source.name for r in derive_routes(cls)] == ["get"]

    def test_class_without_markers_contributes_nothing(self, index: FakeIndex) -> None:
        cls = index.add_class(
            "com.acme.user.UserAction",
            superclass=index.types[BASE_ACTION],
            methods=[FakeMethod("a", annotations=[FakeAnnotation("java.lang.Override")])],
        )
        assert derive_routes(cls) == []

    def test_at_most_one_route_per_method(self, index: FakeIndex) -> None:
        method = FakeMethod("get", annotations=[MARKER, FakeAnnotation(None), MARKER])
        cls = index.add_class("com.acme.user.UserAction", superclass=index.types[BASE_ACTION], methods=[method])
        assert len(derive_routes(cls)) == 1

    def test_find_marker_returns_first_match(self) -> None:
        first = FakeAnnotation(MARKER_ANNOTATION)
        second = FakeAnnotation(MARKER_ANNOTATION)
        method = FakeMethod("get", annotations=[FakeAnnotation(None), first, second])
        assert find_marker(method, ScanConfig()) is first

    def test_inherited_marker_methods_are_included(self, index: FakeIndex) -> None:
        parent = index.add_class(
            "com.acme.common.CrudAction",
            superclass=index.types[BASE_ACTION],
            methods=[_marked("list")],
        )
        child = index.add_class(
            "com.acme.user.UserAction",
            superclass=parent,
            methods=[_marked("get")],
        )
        assert [r.path for r in derive_routes(child)] == [
            "/user/rest/user/get",
            "/user/rest/user/list",
        ]


class TestEmptyContributions:
    def test_class_without_name(self) -> None:
        source = FakeFile(Path("/src/A.java"), "a.b")
        cls = FakeClass(name=None, qualified_name=None, source_file=source)
        cls.add_method(_marked("get"))
        assert derive_routes(cls) == []

    def test_class_without_source_file(self, index: FakeIndex) -> None:
        cls = index.add_external("com.acme.lib.LibAction", superclass=index.types[BASE_ACTION])
        cls.add_method(_marked("get"))
        assert derive_routes(cls) == []

    def test_non_java_source_file(self) -> None:
        source = FakeFile(Path("/src/a.kt"), None)
        cls = FakeClass(name="UserAction", qualified_name="a.UserAction", source_file=source)
        cls.add_method(_marked("get"))
        assert derive_routes(cls) == []


class TestCustomConfig:
    def test_custom_rule_tables(self, index: FakeIndex) -> None:
        config = ScanConfig(
            superclass_prefixes=(SuperclassPrefix(BASE_ACTION, PathPrefix.JSON),),
            return_type_rules=(ReturnTypeRule(TypeMatch.CANONICAL_TEXT, "byte[]", PathPrefix.EXCEL),),
        )
        cls = index.add_class(
            "com.acme.user.UserAction",
            superclass=index.types[BASE_ACTION],
            methods=[_marked("get"), _marked("download", FakeType("byte[]"))],
        )
        assert [r.path for r in derive_routes(cls, config)] == [
            "/user/json/user/get",
            "/user/excel/user/download",
        ]

    def test_custom_marker_and_method(self, index: FakeIndex) -> None:
        config = ScanConfig(marker_annotation="com.acme.Endpoint", http_method=HttpMethod.POST)
        cls = index.add_class(
            "com.acme.user.UserAction",
            superclass=index.types[BASE_ACTION],
            methods=[_marked("ignored"), FakeMethod("get", annotations=[FakeAnnotation("com.acme.Endpoint")])],
        )
        (route,) = derive_routes(cls, config)
        assert route.method is HttpMethod.POST
        assert route.path == "/user/rest/user/get"


class TestSelectPrefix:
    def test_no_superclass(self) -> None:
        assert select_prefix(None, ScanConfig()) is PathPrefix.REST

    def test_sentinel(self) -> None:
        assert select_prefix(APP_ACTION, ScanConfig()) is PathPrefix.JSON
