"""Unit tests for type rendering."""

from sigsync.analysis.rendering import (
    FULLY_QUALIFIED_FORMAT,
    PARAMETER_TYPE_FORMAT,
    QualificationStyle,
    TypeDisplayFormat,
    is_special_type,
    render_type,
)
from sigsync.core.models import TypeRef, TypeRefKind

INT = TypeRef(kind=TypeRefKind.PRIMITIVE, name="int", qualified_name="int")
VOID = TypeRef(kind=TypeRefKind.VOID, name="void", qualified_name="void")
STRING = TypeRef(name="String", qualified_name="java.lang.String")
INTEGER = TypeRef(name="Integer", qualified_name="java.lang.Integer")
USER = TypeRef(name="User", qualified_name="com.example.model.User")


def named(name: str, qualified_name: str, *arguments: TypeRef) -> TypeRef:
    return TypeRef(name=name, qualified_name=qualified_name, type_arguments=arguments)


class TestSpecialTypes:
    def test_primitives_and_void_are_special(self) -> None:
        assert is_special_type(INT)
        assert is_special_type(VOID)

    def test_java_lang_types_are_special(self) -> None:
        assert is_special_type(STRING)

    def test_project_types_are_not_special(self) -> None:
        assert not is_special_type(USER)


class TestRenderType:
    """Tests for render_type with the parameter format."""

    def test_primitive(self) -> None:
        assert render_type(INT) == "int"

    def test_void(self) -> None:
        assert render_type(VOID) == "void"

    def test_named_type_uses_simple_name(self) -> None:
        assert render_type(USER) == "User"

    def test_generic_type(self) -> None:
        future = named("CompletableFuture", "java.util.concurrent.CompletableFuture", INTEGER)
        assert render_type(future) == "CompletableFuture<Integer>"

    def test_nested_generic_arguments(self) -> None:
        map_type = named(
            "Map",
            "java.util.Map",
            STRING,
            named("List", "java.util.List", USER),
        )
        assert render_type(map_type) == "Map<String, List<User>>"

    def test_array_rank(self) -> None:
        matrix = INT.model_copy(update={"array_rank": 2})
        assert render_type(matrix) == "int[][]"

    def test_generic_array(self) -> None:
        lists = named("List", "java.util.List", STRING).model_copy(update={"array_rank": 1})
        assert render_type(lists) == "List<String>[]"

    def test_varargs(self) -> None:
        parts = STRING.model_copy(update={"is_varargs": True})
        assert render_type(parts) == "String..."

    def test_unbounded_wildcard(self) -> None:
        wildcard = TypeRef(kind=TypeRefKind.WILDCARD, name="?", qualified_name="?")
        assert render_type(named("List", "java.util.List", wildcard)) == "List<?>"

    def test_bounded_wildcards(self) -> None:
        extends = TypeRef(
            kind=TypeRefKind.WILDCARD,
            name="?",
            qualified_name="?",
            bound="extends",
            type_arguments=(USER,),
        )
        super_ = extends.model_copy(update={"bound": "super", "type_arguments": (INTEGER,)})
        assert render_type(named("List", "java.util.List", extends)) == "List<? extends User>"
        assert render_type(named("List", "java.util.List", super_)) == "List<? super Integer>"


class TestDisplayFormats:
    """Tests for the fully qualified format."""

    def test_fully_qualified_names(self) -> None:
        result = render_type(named("List", "java.util.List", USER), FULLY_QUALIFIED_FORMAT)
        assert result == "java.util.List<com.example.model.User>"

    def test_fully_qualified_keeps_primitive_keywords(self) -> None:
        assert render_type(INT, FULLY_QUALIFIED_FORMAT) == "int"

    def test_special_types_shorten_java_lang(self) -> None:
        display_format = TypeDisplayFormat(
            qualification=QualificationStyle.FULLY_QUALIFIED, use_special_types=True
        )
        result = render_type(named("List", "java.util.List", STRING), display_format)
        assert result == "java.util.List<String>"

    def test_parameter_format_defaults(self) -> None:
        assert PARAMETER_TYPE_FORMAT.qualification == QualificationStyle.NAME_ONLY
        assert PARAMETER_TYPE_FORMAT.use_special_types is True
