"""
Main application: camera frames in, gesture commands out.
"""
import argparse
import asyncio
import logging
import time
from typing import Optional

import cv2

from .config import load_config
from .controller_mock import MockController, dispatch
from .exceptions import AirscrollError, LandmarkSourceError
from .gestures import GestureSessionController
from .tracker import HandsTracker

logger = logging.getLogger(__name__)


class GestureRecognitionApp:
    """Main application class for hand gesture recognition."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.tracker = HandsTracker(
            max_num_hands=self.config.mediapipe.max_num_hands,
            min_detection_conf=self.config.mediapipe.min_detection_confidence,
            min_tracking_conf=self.config.mediapipe.min_tracking_confidence
        )
        self.controller = MockController()
        self.session = GestureSessionController(self.config)

        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            raise LandmarkSourceError(f"Failed to open camera {self.config.camera.index}")

    async def run(self):
        """Run the main application loop."""
        display = self.config.display
        logger.info(f"Starting {display.window_name}")
        logger.info("Index+Middle extended, move vertically = Scroll")
        logger.info("Index only = Cursor, push toward camera = Click")

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    raise LandmarkSourceError("Failed to read frame from camera")

                landmarks = self.tracker.process(frame)
                result = self.session.process_frame(landmarks, time.monotonic())
                await dispatch(self.controller, result)

                if landmarks:
                    if display.show_landmarks:
                        frame = self.tracker.draw_landmarks(frame, landmarks)
                    history = self.session.state.snapshot() if display.show_trail else ()
                    frame = self.tracker.draw_gesture(frame, landmarks, result, history)

                if display.mirror:
                    frame = cv2.flip(frame, 1)

                status = f"{result.mode.value}: {result.message}"
                if result.scroll_delta:
                    status += f" | dy={result.scroll_delta:+.4f}"
                cv2.putText(frame, status, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
                cv2.putText(frame, "Press 'q' to quit", (10, frame.shape[0] - 20),
                            cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

                cv2.imshow(display.window_name, frame)
                if cv2.waitKey(1) & 0xFF == ord('q'):
                    break
        finally:
            self.close()

    def close(self):
        """Release camera, model and windows."""
        if self.cap.isOpened():
            self.cap.release()
        self.tracker.close()
        cv2.destroyAllWindows()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Hand gesture scroll and pointer control")
    parser.add_argument("--config", default=None, help="Path to YAML config (default: config.default.yaml)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    """Entry point for the application."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        app = GestureRecognitionApp(config_path=args.config)
        await app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except (AirscrollError, FileNotFoundError) as e:
        logger.error(f"Error: {e}")
        return 1
    return 0


def cli() -> None:
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
