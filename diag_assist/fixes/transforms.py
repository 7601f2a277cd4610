"""Pure text transformations backing each quick fix.

Every function takes the full file contents and returns new contents. None of
them touch the file system, so they can be composed and tested in isolation.
"""

from __future__ import annotations

from re import MULTILINE, Match, compile

HDRP_SHADER_VARIABLES = (
    "Packages/com.unity.render-pipelines.high-definition"
    "/Runtime/ShaderLibrary/ShaderVariables.hlsl"
)
CORE_SHADER_VARIABLES = (
    "Packages/com.unity.render-pipelines.core/ShaderLibrary/ShaderVariables.hlsl"
)

URP_CORE_INCLUDE = "Packages/com.unity.render-pipelines.universal/ShaderLibrary/Core.hlsl"
DEPTH_TEXTURE_HEADER = "DeclareDepthTexture.hlsl"
DEPTH_TEXTURE_INCLUDE_LINE = (
    '#include "Packages/com.unity.render-pipelines.universal/ShaderLibrary/'
    'DeclareDepthTexture.hlsl"\n'
)

EVENT_TYPE_TOKEN = "EventType"
EVENT_TYPE_ARGUMENT = "EventType.Repaint"

# Names already ending in Handle are the new API; renaming them again would
# produce FooHandleHandleCap.
_LEGACY_CAP_CALL_RE = compile(r"Handles\.(\w+?)(?<!Handle)Cap\s*\(", MULTILINE)
_HANDLE_CAP_CALL_RE = compile(r"Handles\.(\w+?)HandleCap\s*\(\s*([^\)]*?)\)\s*;", MULTILINE)
_DEPTH_TEXEL_DECL_RE = compile(r"\bfloat4\s+_CameraDepthTexture_TexelSize\s*;\s*", MULTILINE)
_DEPTH_SAMPLER_DECL_RE = compile(r"\bsampler2D\s+_CameraDepthTexture\s*;\s*", MULTILINE)


def rename_handles_caps(text: str) -> str:
    """Rewrite ``Handles.<Name>Cap(`` calls to ``Handles.<Name>HandleCap(``."""
    return _LEGACY_CAP_CALL_RE.sub(lambda m: f"Handles.{m.group(1)}HandleCap(", text)


def add_handle_cap_event_type(text: str) -> str:
    """Append ``EventType.Repaint`` to four-argument ``*HandleCap`` calls.

    Arguments are counted by commas only; a comma nested in a call or a string
    literal is counted too, and calls with nested parentheses never match.
    """
    return _HANDLE_CAP_CALL_RE.sub(_pad_event_type, text)


def _pad_event_type(match: Match[str]) -> str:
    args = match.group(2)
    if args.count(",") == 3 and EVENT_TYPE_TOKEN not in args:
        return f"Handles.{match.group(1)}HandleCap({args}, {EVENT_TYPE_ARGUMENT});"
    return match.group(0)


def fix_handles_caps(text: str) -> str:
    # The padding pass only recognizes the renamed calls.
    return add_handle_cap_event_type(rename_handles_caps(text))


def fix_hdrp_include(text: str) -> str:
    return text.replace(HDRP_SHADER_VARIABLES, CORE_SHADER_VARIABLES)


def remove_depth_texel_declarations(text: str) -> str:
    """Drop every ``float4 _CameraDepthTexture_TexelSize;`` statement."""
    return _DEPTH_TEXEL_DECL_RE.sub("", text)


def remove_depth_sampler_declarations(text: str) -> str:
    """Drop every legacy ``sampler2D _CameraDepthTexture;`` statement."""
    return _DEPTH_SAMPLER_DECL_RE.sub("", text)


def ensure_depth_texture_include(text: str) -> str:
    """Include DeclareDepthTexture.hlsl on the line after the URP Core include.

    Text that already references the header, or has no URP Core include to
    anchor on, is returned unchanged.
    """
    if DEPTH_TEXTURE_HEADER in text:
        return text
    index = text.find(URP_CORE_INCLUDE)
    if index < 0:
        return text
    line_end = text.find("\n", index)
    if line_end < 0:
        return text + "\n" + DEPTH_TEXTURE_INCLUDE_LINE
    return text[: line_end + 1] + DEPTH_TEXTURE_INCLUDE_LINE + text[line_end + 1 :]


def fix_urp_texel_redef(text: str) -> str:
    text = remove_depth_texel_declarations(text)
    text = remove_depth_sampler_declarations(text)
    return ensure_depth_texture_include(text)
