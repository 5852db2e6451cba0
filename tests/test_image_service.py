import pytest

from swiv.models.pixel import Pixel
from swiv.services.bmp_parser import parse_bmp
from swiv.services.errors import ImageIoError, MagicMismatchError, UnsupportedExtensionError
from swiv.services.image_service import ImageService
from swiv.services.ppm_parser import parse_ppm

from conftest import make_bmp, make_ppm


@pytest.fixture
def service():
    return ImageService()


@pytest.mark.parametrize("extension, parser", [(".bmp", parse_bmp), ("PPM", parse_ppm), (".Bmp", parse_bmp)])
def test_parser_selected_by_extension(service, extension, parser):
    assert service.parser_for(extension) is parser


def test_unknown_extension(service, tmp_path):
    path = tmp_path / "photo.png"
    path.write_bytes(b"\x89PNG")
    with pytest.raises(UnsupportedExtensionError) as excinfo:
        service.load_image(path)
    assert excinfo.value.reason == "extension"
    assert excinfo.value.path == path


def test_load_upper_case_extension(service, tmp_path):
    path = tmp_path / "IMAGE.PPM"
    path.write_bytes(make_ppm(1, 1, bytes([4, 5, 6])))
    image = service.load_image(path, locked_aspect_ratio=False)
    assert image.pixels == [Pixel.opaque(4, 5, 6)]
    assert image.locked_aspect_ratio is False


def test_load_bmp(service, tmp_path):
    path = tmp_path / "pic.bmp"
    path.write_bytes(make_bmp([[(1, 2, 3)]]))
    assert service.load_image(str(path)).pixels == [Pixel.opaque(1, 2, 3)]


def test_missing_file(service, tmp_path):
    with pytest.raises(ImageIoError):
        service.load_image(tmp_path / "nope.bmp")


def test_content_must_match_extension(service):
    with pytest.raises(MagicMismatchError):
        service.decode(make_ppm(1, 1, bytes(3)), "bmp")


def test_decode_bytes(service):
    assert service.decode(make_bmp([[(9, 8, 7)]]), ".bmp").pixels == [Pixel.opaque(9, 8, 7)]
