"""
どこで: `engine.render` のシェーダ定義。
何を: 頂点色をそのまま補間する三角形メッシュ用 GLSL と、そのプログラム生成。
なぜ: 変位とシェーディングは CPU 側（effects）で済ませるため、GPU は MVP 変換と色の補間だけを担う。
"""

from __future__ import annotations

from typing import Any

VERTEX_SHADER = """
#version 330 core
in vec3 in_position;
in vec4 in_color;

uniform mat4 mvp;

out vec4 v_color;

void main() {
    v_color = in_color;
    gl_Position = mvp * vec4(in_position, 1.0);
}
"""

FRAGMENT_SHADER = """
#version 330 core
in vec4 v_color;
out vec4 frag_color;

void main() {
    frag_color = v_color;
}
"""


class Shader:
    @staticmethod
    def create_shader(mgl_context: Any) -> Any:
        """頂点色メッシュ用のプログラムを生成する。"""
        return mgl_context.program(vertex_shader=VERTEX_SHADER, fragment_shader=FRAGMENT_SHADER)


__all__ = ["Shader", "VERTEX_SHADER", "FRAGMENT_SHADER"]
