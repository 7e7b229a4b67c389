"""Tests for collaborators.py: image sizes, markdown and directory listing."""

import pytest

from conftest import write_png
from sitecontent.collaborators import is_junk, list_dir, measure_image, render_markdown
from sitecontent.errors import ImageError


class TestMeasureImage:

    def test_png(self, tmp_path):
        write_png(tmp_path / 'cover.png', 120, 45)
        size = measure_image(tmp_path / 'cover.png')
        assert (size.width, size.height) == (120, 45)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageError) as exc:
            measure_image(tmp_path / 'missing.png')
        assert 'missing.png' in str(exc.value)

    def test_not_an_image(self, tmp_path):
        path = tmp_path / 'notes.png'
        path.write_text('definitely not a png')
        with pytest.raises(ImageError):
            measure_image(path)

    def test_svg_width_height(self, tmp_path):
        path = tmp_path / 'logo.svg'
        path.write_text('<svg xmlns="http://www.w3.org/2000/svg" width="32px" height="16"></svg>')
        size = measure_image(path)
        assert (size.width, size.height) == (32, 16)

    def test_svg_view_box(self, tmp_path):
        path = tmp_path / 'logo.svg'
        path.write_text('<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 300 150"></svg>')
        size = measure_image(path)
        assert (size.width, size.height) == (300, 150)

    def test_svg_width_only_scales_view_box(self, tmp_path):
        path = tmp_path / 'logo.svg'
        path.write_text('<svg width="60" viewBox="0 0 300 150"></svg>')
        size = measure_image(path)
        assert (size.width, size.height) == (60, 30)

    def test_svg_without_size(self, tmp_path):
        path = tmp_path / 'logo.svg'
        path.write_text('<svg></svg>')
        with pytest.raises(ImageError):
            measure_image(path)


class TestRenderMarkdown:

    def test_renders_fragment(self):
        html = render_markdown('Licensed under **MIT**')
        assert html == '<p>Licensed under <strong>MIT</strong></p>'

    def test_links(self):
        html = render_markdown('[source](https://example.com)')
        assert '<a href="https://example.com">source</a>' in html


class TestListDir:

    def test_junk_detection(self):
        assert is_junk('.DS_Store')
        assert is_junk('Thumbs.db')
        assert is_junk('._index.md')
        assert is_junk('index.md~')
        assert is_junk('.index.md.swp')
        assert not is_junk('index.md')
        assert not is_junk('my-post')

    def test_sorted_without_junk(self, tmp_path):
        for name in ['b-post', 'a-post', '.DS_Store', 'Thumbs.db']:
            (tmp_path / name).mkdir()
        assert list_dir(tmp_path) == ['a-post', 'b-post']
