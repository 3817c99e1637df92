import logging
import os
import sys

from .errors import ImageCombineError
from .pipeline import batch_combine, combine_files
from .utils import configure_logging, load_config

logger = logging.getLogger(__name__)

USAGE = "Usage: combine-images <image_1> <image_2> <output>"


def main(image_1, image_2, output, cfg=None):
    """Combine two images, or two directories of images pairwise."""
    cfg = cfg or load_config()
    if os.path.isdir(image_1) and os.path.isdir(image_2):
        outputs = batch_combine(image_1, image_2, output, exts=tuple(cfg["batch"]["extensions"]))
        print(f"✅ Combined {len(outputs)} image pairs into {output}")
        return outputs
    result = combine_files(image_1, image_2, output)
    print(f"✅ Finished. Combined image: {result.name} ({result.width}x{result.height})")
    return result


def cli(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 3:
        print(USAGE)
        return 1
    cfg = load_config()
    configure_logging(cfg)
    try:
        main(*argv, cfg=cfg)
    except (ImageCombineError, FileNotFoundError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(cli())
