from bmptypes import (
    BMPFileError, ImageProperties, OperationResult, OperationResultType,
    Orientation, PixelFormat, operation_result_type_to_string,
)


def test_result_type_to_string():
    assert operation_result_type_to_string(OperationResultType.OK) == "BMP file operation successful."
    assert operation_result_type_to_string(OperationResultType.CORRUPT) == \
        "BMP file read error. File has been corrupted."
    assert operation_result_type_to_string("bogus") == "Unsupported operation result type."


def test_every_result_type_has_a_description():
    for result_type in OperationResultType:
        assert operation_result_type_to_string(result_type) != "Unsupported operation result type."


def test_operation_result():
    assert OperationResult().result_type == OperationResultType.INVALID
    assert not OperationResult()

    ok = OperationResult(OperationResultType.OK)
    assert ok.is_ok()
    assert ok
    assert ok == OperationResultType.OK
    assert ok == OperationResult(OperationResultType.OK)
    assert str(ok) == "BMP file operation successful."

    failed = OperationResult(OperationResultType.BUFFER_TOO_SMALL)
    assert not failed.is_ok()
    assert not failed
    assert failed != OperationResultType.OK
    assert repr(failed) == "OperationResult(BUFFER_TOO_SMALL)"
    assert operation_result_type_to_string(failed) == "Buffer too small for BMP file operation."


def test_bmp_file_error_carries_result_type():
    error = BMPFileError(OperationResultType.NOT_A_BMP_FILE)
    assert error.result_type == OperationResultType.NOT_A_BMP_FILE
    assert str(error) == "BMP file read error. Not a BMP file."


def test_image_properties_defaults_and_reset():
    props = ImageProperties()
    assert props.width == 0
    assert props.height == 0
    assert props.line_padding == 0
    assert props.pixel_format == PixelFormat.INVALID
    assert props.orientation == Orientation.BOTTOM_UP
    assert not props.is_valid()

    props = ImageProperties(4, 3, 1, PixelFormat.BGR8, Orientation.TOP_DOWN)
    assert props.is_valid()
    copy = props.copy()
    assert copy == props and copy is not props
    props.reset()
    assert props == ImageProperties()
    assert copy != props
