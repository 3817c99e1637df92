import logging
import os
import traceback

from .errors import FormatMismatchError, ImageCombineError
from .image_reader import find_image_from_path
from .image_writer import save_buffer_with_format
from .interleave import combine
from .normalize import standardize
from .output import OutputImage
from .utils import ensure_dirs, sorted_files

logger = logging.getLogger(__name__)


def combine_images(image_1, image_2, name):
    """Standardize, interleave and commit two decoded images into an OutputImage."""
    image_s, image_p = standardize(image_1, image_2)
    output = OutputImage(image_s.width, image_s.height, name)
    combined_data = combine(image_s, image_p)
    output.set_data(combined_data)
    return output


def combine_files(image_1_path, image_2_path, output_path):
    """Combine two image files of the same format and save the result in that format."""
    logger.info(f"Combining {image_1_path} + {image_2_path} -> {output_path}")
    image_1, image_format_1 = find_image_from_path(image_1_path)
    image_2, image_format_2 = find_image_from_path(image_2_path)

    if image_format_1 != image_format_2:
        logger.error(f"Different image formats: {image_format_1.name} vs {image_format_2.name}")
        raise FormatMismatchError(image_format_1, image_format_2)

    output = combine_images(image_1, image_2, os.fspath(output_path))
    save_buffer_with_format(output.name, output.data, output.width, output.height, image_format_1)
    return output


def batch_combine(dir_1, dir_2, out_dir, exts=(".png", ".jpg", ".jpeg")):
    """Combine sorted image files of two directories pairwise into out_dir.

    Pairs are formed in sorted order and the output takes the name of the
    file from ``dir_1``. Failed pairs are logged and skipped.
    """
    ensure_dirs(out_dir)
    files_1 = sorted_files(dir_1, exts)
    files_2 = sorted_files(dir_2, exts)
    logger.info(f"Found {len(files_1)} files in {dir_1} and {len(files_2)} files in {dir_2}")
    if len(files_1) != len(files_2):
        logger.warning(f"Directories hold different file counts, combining first {min(len(files_1), len(files_2))} pairs")

    outputs = []
    for f1, f2 in zip(files_1, files_2):
        out_path = os.path.join(out_dir, f1)
        try:
            combine_files(os.path.join(dir_1, f1), os.path.join(dir_2, f2), out_path)
            outputs.append(out_path)
        except (ImageCombineError, FileNotFoundError) as e:
            logger.error(f"Skipping pair {f1} / {f2}: {e}")
            logger.debug(traceback.format_exc())
    logger.info(f"Combined {len(outputs)} image pairs into {out_dir}")
    return outputs
