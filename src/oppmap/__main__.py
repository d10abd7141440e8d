"""Main entry point for oppmap."""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication
from PyQt6.QtGui import QSurfaceFormat

from oppmap.controller.controller import Controller
from oppmap.model.board import TaskBoard
from oppmap.view.theme import get_theme, list_themes


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="oppmap",
        description="AI Opportunity Mapper - 3D scatter view of workplace challenges",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--theme",
        choices=list_themes(),
        default="corndel",
        help="Color theme for the 3D view (default: corndel)",
    )
    parser.add_argument(
        "--msaa",
        type=int,
        choices=[0, 2, 4, 8],
        default=4,
        metavar="N",
        help="Multisample anti-aliasing samples (default: 4)",
    )
    parser.add_argument(
        "--no-labels",
        action="store_true",
        help="Disable task name and axis labels",
    )
    parser.add_argument(
        "--empty",
        action="store_true",
        help="Start without the sample challenges",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


def configure_surface_format(samples: int) -> QSurfaceFormat:
    """Install the default OpenGL surface format.

    Legacy OpenGL 2.1 compatibility profile for PyOpenGL fixed-function
    rendering.
    """
    fmt = QSurfaceFormat()
    fmt.setVersion(2, 1)
    fmt.setProfile(QSurfaceFormat.OpenGLContextProfile.CompatibilityProfile)
    fmt.setDepthBufferSize(24)
    fmt.setStencilBufferSize(8)
    fmt.setSamples(samples)
    QSurfaceFormat.setDefaultFormat(fmt)
    return fmt


def main() -> int:
    """Main entry point.

    Returns:
        Exit code
    """
    args = parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Surface format must be set before the QApplication creates contexts
    configure_surface_format(args.msaa)

    # Create Qt application
    app = QApplication(sys.argv)

    controller = Controller(
        board=TaskBoard(with_samples=not args.empty),
        theme=get_theme(args.theme),
        show_labels=not args.no_labels,
    )
    controller.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
