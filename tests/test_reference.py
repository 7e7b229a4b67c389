"""Tests for reference.py: datasets and tag explainers."""

import json

import pytest

from sitecontent.errors import ContentError
from sitecontent.reference import find_explainer, load_reference_data, load_tags


def write_tags(tmp_path, tags):
    path = tmp_path / 'tags.json'
    path.write_text(json.dumps(tags))
    return path


class TestFindExplainer:

    def test_license_file(self, tmp_path):
        (tmp_path / 'stickers').mkdir()
        (tmp_path / 'stickers' / 'vue-LICENSE.md').write_text('MIT licensed')
        assert find_explainer('/stickers/vue.svg', tmp_path) == ('MIT licensed', 'license')

    def test_attribution_file(self, tmp_path):
        (tmp_path / 'stickers').mkdir()
        (tmp_path / 'stickers' / 'vue-ATTRIBUTION.md').write_text('Drawn by Ava')
        assert find_explainer('/stickers/vue.svg', tmp_path) == ('Drawn by Ava', 'attribution')

    def test_license_wins_over_attribution(self, tmp_path):
        (tmp_path / 'stickers').mkdir()
        (tmp_path / 'stickers' / 'vue-LICENSE.md').write_text('MIT licensed')
        (tmp_path / 'stickers' / 'vue-ATTRIBUTION.md').write_text('Drawn by Ava')
        assert find_explainer('/stickers/vue.svg', tmp_path) == ('MIT licensed', 'license')

    def test_no_sibling_files(self, tmp_path):
        assert find_explainer('/stickers/vue.svg', tmp_path) == (None, None)

    def test_raster_images_have_no_explainer(self, tmp_path):
        (tmp_path / 'stickers').mkdir()
        (tmp_path / 'stickers' / 'vue-LICENSE.md').write_text('MIT licensed')
        assert find_explainer('/stickers/vue.png', tmp_path) == (None, None)

    def test_no_image(self, tmp_path):
        assert find_explainer(None, tmp_path) == (None, None)


class TestLoadTags:

    def test_explainer_rendered(self, tmp_path, fake_render):
        (tmp_path / 'stickers').mkdir()
        (tmp_path / 'stickers' / 'vue-LICENSE.md').write_text('MIT licensed\n')
        path = write_tags(tmp_path, {
            'vue': {'displayName': 'Vue', 'image': '/stickers/vue.svg'},
            'react': {'displayName': 'React'},
        })
        tags = load_tags(path, tmp_path, fake_render)

        assert list(tags) == ['vue', 'react']
        assert tags['vue'].explainer_html == '<p>MIT licensed</p>'
        assert tags['vue'].explainer_type == 'license'
        assert tags['react'].explainer_html is None
        assert tags['react'].explainer_type is None
        assert fake_render.calls == ['MIT licensed\n']

    def test_fields(self, tmp_path, fake_render):
        path = write_tags(tmp_path, {
            'js': {'displayName': 'JavaScript', 'emoji': '✨', 'shownWithBranding': True, 'color': 'gold'},
        })
        tag = load_tags(path, tmp_path, fake_render)['js']
        assert tag.id == 'js'
        assert tag.label == 'JavaScript'
        assert tag.emoji == '✨'
        assert tag.shown_with_branding is True
        assert tag.extra == {'color': 'gold'}

    def test_label_falls_back_to_id(self, tmp_path, fake_render):
        tag = load_tags(write_tags(tmp_path, {'misc': {}}), tmp_path, fake_render)['misc']
        assert tag.label == 'misc'

    def test_not_an_object(self, tmp_path, fake_render):
        with pytest.raises(ContentError):
            load_tags(write_tags(tmp_path, ['vue']), tmp_path, fake_render)


class TestLoadReferenceData:

    def test_loads_all_datasets(self, site, fake_render):
        site.write_data()
        data = load_reference_data(site.data_dir, site.public_dir, fake_render)
        assert data.about == {'name': 'Unicorn Utterances'}
        assert [u['id'] for u in data.unicorns] == ['ava']
        assert data.find_role('author') == {'id': 'author', 'prettyname': 'Author'}
        assert data.find_role('wizard') is None
        assert data.find_license('cc-by-4')['displayName'] == 'Attribution 4.0 International'
        assert data.find_license('gpl') is None
        assert data.find_license(None) is None
        assert data.has_tag('angular')
        assert not data.has_tag('cobol')

    def test_about_is_optional(self, site, fake_render):
        site.write_data()
        (site.data_dir / 'about.json').unlink()
        data = load_reference_data(site.data_dir, site.public_dir, fake_render)
        assert data.about == {}

    def test_missing_dataset_is_fatal(self, site, fake_render):
        site.write_data()
        (site.data_dir / 'licenses.json').unlink()
        with pytest.raises(ContentError) as exc:
            load_reference_data(site.data_dir, site.public_dir, fake_render)
        assert 'licenses.json' in str(exc.value)

    def test_malformed_dataset_is_fatal(self, site, fake_render):
        site.write_data()
        (site.data_dir / 'roles.json').write_text('[{"id": ')
        with pytest.raises(ContentError):
            load_reference_data(site.data_dir, site.public_dir, fake_render)
