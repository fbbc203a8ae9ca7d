"""Diagnostics that describe the GL state at a draw call."""

from __future__ import annotations

from typing import Any, Iterable, List

_GL_FLOAT = 0x1406
_GL_INT = 0x1404
_GL_UNSIGNED_INT = 0x1405
_GL_FLOAT_VEC2 = 0x8B50
_GL_FLOAT_VEC3 = 0x8B51
_GL_FLOAT_VEC4 = 0x8B52
_GL_BOOL = 0x8B56
_GL_FLOAT_MAT2 = 0x8B5A
_GL_FLOAT_MAT3 = 0x8B5B
_GL_FLOAT_MAT4 = 0x8B5C

_TYPE_NAMES = {
    _GL_FLOAT: "GL_FLOAT",
    _GL_FLOAT_VEC2: "GL_FLOAT_VEC2",
    _GL_FLOAT_VEC3: "GL_FLOAT_VEC3",
    _GL_FLOAT_VEC4: "GL_FLOAT_VEC4",
    _GL_INT: "GL_INT",
    _GL_UNSIGNED_INT: "GL_UNSIGNED_INT",
    _GL_BOOL: "GL_BOOL",
    _GL_FLOAT_MAT4: "GL_FLOAT_MAT4",
    _GL_FLOAT_MAT3: "GL_FLOAT_MAT3",
    _GL_FLOAT_MAT2: "GL_FLOAT_MAT2",
}

_NAME_SIZE = 256


def gl_type_to_string(gl_type: int) -> str:
    """Readable name of a GL uniform or attribute type."""
    return _TYPE_NAMES.get(gl_type, f"Unknown Type ({gl_type})")


def _format_vec(prefix: str, values: Iterable[float]) -> str:
    return f"{prefix}(" + ", ".join(f"{v:f}" for v in values) + ")"


def _format_mat4(column_major: List[float]) -> str:
    columns = [column_major[i : i + 4] for i in range(0, 16, 4)]
    return "mat4x4(" + ", ".join(_format_vec("", col) for col in columns) + ")"


def _attrib_offset(gl: Any, index: int) -> int:
    # The out-parameter type is taken from the function's own declaration.
    slot = gl.glGetVertexAttribPointerv.argtypes[-1]._type_()
    gl.glGetVertexAttribPointerv(index, gl.GL_VERTEX_ATTRIB_ARRAY_POINTER, slot)
    return slot.value or 0


def dump_gl_state(program_id: int, index_count: int, index_type: int) -> str:
    """Describe the bound program, buffers, attributes, uniforms and key states.

    Needs a current GL context. The report is printed and also returned.
    """
    from pyglet import gl

    def get_int(pname: int) -> int:
        value = gl.GLint()
        gl.glGetIntegerv(pname, value)
        return value.value

    def get_attrib(index: int, pname: int) -> int:
        value = gl.GLint()
        gl.glGetVertexAttribiv(index, pname, value)
        return value.value

    lines: List[str] = ["", "", "==================== OpenGL State Dump ===================="]

    current = get_int(gl.GL_CURRENT_PROGRAM)
    lines += [
        "[Shader Program]",
        f"  - Expected Program ID: {program_id}",
        f"  - Currently Bound Program ID: {current}",
    ]
    if program_id != current:
        lines.append("  *** CRITICAL ERROR: Wrong shader program is bound! ***")

    vao = get_int(gl.GL_VERTEX_ARRAY_BINDING)
    vbo = get_int(gl.GL_ARRAY_BUFFER_BINDING)
    ebo = get_int(gl.GL_ELEMENT_ARRAY_BUFFER_BINDING)
    lines += [
        "",
        "[Buffer Bindings]",
        f"  - Bound VAO: {vao}",
        f"  - Bound VBO (Array Buffer): {vbo}",
        f"  - Bound EBO (Element Buffer): {ebo}",
    ]
    if 0 in (vao, vbo, ebo):
        lines.append("  *** WARNING: A required buffer is not bound (ID is 0). ***")

    lines += ["", f"[Vertex Attributes (for VAO {vao})]"]
    for index in range(get_int(gl.GL_MAX_VERTEX_ATTRIBS)):
        if not get_attrib(index, gl.GL_VERTEX_ATTRIB_ARRAY_ENABLED):
            continue
        size = get_attrib(index, gl.GL_VERTEX_ATTRIB_ARRAY_SIZE)
        attr_type = get_attrib(index, gl.GL_VERTEX_ATTRIB_ARRAY_TYPE)
        stride = get_attrib(index, gl.GL_VERTEX_ATTRIB_ARRAY_STRIDE)
        normalized = get_attrib(index, gl.GL_VERTEX_ATTRIB_ARRAY_NORMALIZED)
        offset = _attrib_offset(gl, index)
        lines.append(
            f"  - Location {index}: Enabled, Size: {size}, "
            f"Type: {gl_type_to_string(attr_type)}, Stride: {stride}, "
            f"Normalized: {'Yes' if normalized else 'No'}, "
            f"Offset: {hex(offset)}"
        )

    lines += [
        "",
        "[Draw Call]",
        "  - Function: glDrawElements",
        "  - Mode: GL_TRIANGLES",
        f"  - Index Count: {index_count}",
        "  - Index Type: "
        + ("GL_UNSIGNED_SHORT" if index_type == gl.GL_UNSIGNED_SHORT else "Other"),
    ]

    lines += ["", f"[Uniform Values (for Program {program_id})]"]
    count = gl.GLint()
    gl.glGetProgramiv(program_id, gl.GL_ACTIVE_UNIFORMS, count)
    for index in range(count.value):
        lines.extend(_describe_uniform(gl, program_id, index))

    depth_func = get_int(gl.GL_DEPTH_FUNC)
    lines += [
        "",
        "[GL States]",
        "  - GL_DEPTH_TEST: "
        + ("Enabled" if gl.glIsEnabled(gl.GL_DEPTH_TEST) else "Disabled"),
        "  - GL_DEPTH_FUNC: " + ("GL_LESS" if depth_func == gl.GL_LESS else "Other"),
        "  - GL_BLEND: " + ("Enabled" if gl.glIsEnabled(gl.GL_BLEND) else "Disabled"),
        "================== End of State Dump ==================",
        "",
    ]

    text = "\n".join(lines)
    print(text)
    return text


def _describe_uniform(gl: Any, program_id: int, index: int) -> List[str]:
    name = (gl.GLchar * _NAME_SIZE)()
    length = gl.GLsizei()
    size = gl.GLint()
    utype = gl.GLenum()
    gl.glGetActiveUniform(program_id, index, _NAME_SIZE, length, size, utype, name)
    location = gl.glGetUniformLocation(program_id, name)
    uniform_name = name.value.decode(errors="replace")
    lines = [
        f"  - Uniform '{uniform_name}' (Location {location}, "
        f"Type: {gl_type_to_string(utype.value)})"
    ]
    if location == -1:
        return lines
    if utype.value == gl.GL_FLOAT_MAT4:
        buf = (gl.GLfloat * 16)()
        gl.glGetUniformfv(program_id, location, buf)
        lines.append("    Value:\n" + _format_mat4(list(buf)))
    elif utype.value == gl.GL_FLOAT_VEC4:
        buf = (gl.GLfloat * 4)()
        gl.glGetUniformfv(program_id, location, buf)
        lines.append("    Value: " + _format_vec("vec4", list(buf)))
    return lines