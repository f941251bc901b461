"""Fixed audit constants maintained alongside the rules.

None of these are configurable at runtime. The legacy alias exception list is
frozen: names may be removed once the classes are renamed, never added.
"""

from __future__ import annotations

KIND_CLASS = "class"
KIND_CAPABILITY = "capability"
KIND_ENUM = "enum"
TYPE_KINDS: frozenset[str] = frozenset({KIND_CLASS, KIND_CAPABILITY, KIND_ENUM})

VISIBILITY_PUBLIC = "public"
VISIBILITY_INTERNAL = "internal"
VISIBILITIES: frozenset[str] = frozenset({VISIBILITY_PUBLIC, VISIBILITY_INTERNAL})

MEMBER_METHOD = "method"
MEMBER_PROPERTY = "property"
MEMBER_KINDS: frozenset[str] = frozenset({MEMBER_METHOD, MEMBER_PROPERTY})

REQUIRED_OPTION = "required-option"
DEFAULT_OPTION = "default-option"
THREAD_AGNOSTIC = "thread-agnostic"
APP_DOMAIN_FIXED_OUTPUT = "app-domain-fixed-output"
RAW_VALUE_CAPABLE = "raw-value-capable"
STRING_VALUE_RENDERER = "string-value-renderer"
ALIAS = "alias"

# Types that only act as implementation markers and never appear in a signature.
DEFAULT_ROOT_SET: frozenset[str] = frozenset(
    {
        "NLog.Config.IInstallable",
    }
)

INTERNAL_SEGMENT = "Internal"
INTERNAL_VISIBILITY_ALLOW_LIST: frozenset[str] = frozenset(
    {
        "NLog.Internal.Xamarin.PreserveAttribute",
        "NLog.Internal.Fakeables.IAppDomain",
    }
)

RAW_VALUE_CAPABILITY = "NLog.Internal.IRawValue"
STRING_VALUE_RENDERER_CAPABILITY = "NLog.Internal.IStringValueRenderer"

RENDERING_BASE = "NLog.LayoutRenderers.LayoutRenderer"
WRAPPER_BASE = "NLog.LayoutRenderers.Wrappers.WrapperLayoutRendererBase"
RENDERER_SUFFIX = "LayoutRenderer"
WRAPPER_SUFFIX = "LayoutRendererWrapper"
ALIAS_SEPARATORS: tuple[str, ...] = ("-",)

# Concrete rendering-base subclasses registered programmatically instead of by alias.
ALIASLESS_RENDERERS: frozenset[str] = frozenset(
    {
        "NLog.LayoutRenderers.FuncLayoutRenderer",
        "NLog.LayoutRenderers.FuncThreadAgnosticLayoutRenderer",
    }
)

# These class names should be repaired with the next major version bump.
# Do NOT add more names to this list.
LEGACY_ALIAS_EXCEPTIONS: frozenset[str] = frozenset(
    {
        "GarbageCollectorInfoLayoutRenderer",
        "ScopeContextNestedStatesLayoutRenderer",
        "ScopeContextPropertyLayoutRenderer",
        "ScopeContextTimingLayoutRenderer",
        "TraceActivityIdLayoutRenderer",
        "SpecialFolderApplicationDataLayoutRenderer",
        "SpecialFolderCommonApplicationDataLayoutRenderer",
        "SpecialFolderLocalApplicationDataLayoutRenderer",
        "DirectorySeparatorLayoutRenderer",
        "LiteralWithRawValueLayoutRenderer",
        "LocalIpAddressLayoutRenderer",
        "VariableLayoutRenderer",
        "ObjectPathRendererWrapper",
        "PaddingLayoutRendererWrapper",
    }
)

# Foreign types with value semantics; snapshots may extend this via `value_types`.
BUILTIN_VALUE_TYPES: frozenset[str] = frozenset(
    {
        "System.Boolean",
        "System.Byte",
        "System.SByte",
        "System.Char",
        "System.Decimal",
        "System.Double",
        "System.Single",
        "System.Int16",
        "System.Int32",
        "System.Int64",
        "System.UInt16",
        "System.UInt32",
        "System.UInt64",
        "System.IntPtr",
        "System.UIntPtr",
        "System.DateTime",
        "System.DateTimeOffset",
        "System.TimeSpan",
        "System.Guid",
        "System.Nullable`1",
    }
)
