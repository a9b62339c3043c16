"""
UI Renderer

Renders a DrawBatch with moderngl. Creates and owns its shaders and
buffers; the host passes in its moderngl context.

Vertex assembly lives in build_quad_vertices / build_line_vertices so it
can be checked without a GL context.
"""

from __future__ import annotations
from typing import List, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    import moderngl
    from gamesense.ui.draw import DrawBatch, DrawQuad, DrawLine


# Quads and lines share one vertex layout: pos, color
VERTEX_FORMAT = "2f 4f"
VERTEX_STRIDE = 24          # 6 floats * 4 bytes

_VERTEX_SHADER = """
#version 330
in vec2 in_pos;
in vec4 in_color;
out vec4 v_color;
uniform vec2 u_screen_size;

void main() {
    vec2 ndc = (in_pos / u_screen_size) * 2.0 - 1.0;
    gl_Position = vec4(ndc.x, -ndc.y, 0.0, 1.0);
    v_color = in_color;
}
"""

_FRAGMENT_SHADER = """
#version 330
in vec4 v_color;
out vec4 frag_color;
void main() { frag_color = v_color; }
"""


def build_quad_vertices(quads: List['DrawQuad']) -> np.ndarray:
    """Two triangles per quad: (len(quads) * 6, 6) float32."""
    vertices = np.zeros((len(quads) * 6, 6), dtype=np.float32)

    for i, q in enumerate(quads):
        x0, y0 = q.x, q.y
        x1, y1 = q.x + q.w, q.y + q.h
        corners = ((x0, y0), (x1, y0), (x1, y1), (x0, y0), (x1, y1), (x0, y1))
        vertices[i * 6:(i + 1) * 6, :2] = corners
        vertices[i * 6:(i + 1) * 6, 2:] = q.color

    return vertices


def build_line_vertices(lines: List['DrawLine']) -> np.ndarray:
    """Two vertices per line: (len(lines) * 2, 6) float32."""
    vertices = np.zeros((len(lines) * 2, 6), dtype=np.float32)

    for i, ln in enumerate(lines):
        base = i * 2
        vertices[base + 0] = [ln.x0, ln.y0, *ln.color]
        vertices[base + 1] = [ln.x1, ln.y1, *ln.color]

    return vertices


class _VertexStream:
    """A growable dynamic VBO and its vertex array."""

    def __init__(self, ctx: 'moderngl.Context', program: 'moderngl.Program'):
        self.ctx = ctx
        self.program = program
        self.vbo = None
        self.vao = None
        self.capacity = 0

    def upload(self, vertices: np.ndarray):
        needed = len(vertices)
        if self.vbo is None or self.capacity < needed:
            self.release()
            self.capacity = max(needed, self.capacity * 2, 256)
            self.vbo = self.ctx.buffer(reserve=self.capacity * VERTEX_STRIDE, dynamic=True)
            self.vao = self.ctx.vertex_array(
                self.program, [(self.vbo, VERTEX_FORMAT, "in_pos", "in_color")]
            )
        self.vbo.write(vertices.tobytes())

    def draw(self, mode: int, count: int):
        self.vao.render(mode=mode, vertices=count)

    def release(self):
        # The VAO references the VBO, so it goes first
        if self.vao is not None:
            self.vao.release()
        if self.vbo is not None:
            self.vbo.release()
        self.vao = self.vbo = None


class UIRenderer:
    """
    Standalone renderer for gamesense draw batches.

    Usage:
        renderer = UIRenderer(ctx)

        # Each frame:
        draw_ctx.clear()
        window.draw(draw_ctx)
        renderer.render(draw_ctx.finalize(), screen_width, screen_height)
    """

    def __init__(self, ctx: 'moderngl.Context'):
        self.ctx = ctx
        self._program = None
        self._quads = None
        self._lines = None

    def _ensure_initialized(self):
        """Create GPU resources on first use."""
        if self._program is not None:
            return
        self._program = self.ctx.program(
            vertex_shader=_VERTEX_SHADER,
            fragment_shader=_FRAGMENT_SHADER,
        )
        self._quads = _VertexStream(self.ctx, self._program)
        self._lines = _VertexStream(self.ctx, self._program)

    def render(self, batch: 'DrawBatch', screen_width: int, screen_height: int):
        """
        Render a DrawBatch to the currently bound framebuffer.

        Args:
            batch: DrawBatch containing quads, lines, and text commands.
            screen_width: Window width in pixels.
            screen_height: Window height in pixels.
        """
        self._ensure_initialized()
        self._program["u_screen_size"].value = (screen_width, screen_height)

        if batch.quads:
            vertices = build_quad_vertices(batch.quads)
            self._quads.upload(vertices)
            self._quads.draw(self.ctx.TRIANGLES, len(vertices))

        if batch.lines:
            vertices = build_line_vertices(batch.lines)
            self._lines.upload(vertices)
            self._lines.draw(self.ctx.LINES, len(vertices))

        # TODO: rasterize batch.texts once a font atlas is loaded

    def release(self):
        """Release GPU resources."""
        if self._program is None:
            return
        self._quads.release()
        self._lines.release()
        self._program.release()
        self._program = self._quads = self._lines = None
