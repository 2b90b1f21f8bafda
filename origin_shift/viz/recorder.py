import logging
import os
from datetime import datetime
import cv2
import numpy as np

logger = logging.getLogger(__name__)

class VideoRecorder:
    """Writes RGB frames (height, width, 3) to an mp4 file."""
    def __init__(self, active=False, output_file=None, fps=30):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0

        if self.active and not self.output_file:
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            fname = f"origin_shift_{ts}.mp4"
            if os.path.exists("recordings"):
                self.output_file = os.path.join("recordings", fname)
            else:
                self.output_file = fname

    def capture_frame(self, frame: np.ndarray):
        if not self.active:
            return

        height, width = frame.shape[:2]

        # Initialize writer on first frame; later frames are fitted to its size
        if self.writer is None:
            self.frame_size = (width, height)
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, self.frame_size)
            logger.info(f"Recording started: {self.output_file}")
        elif (width, height) != self.frame_size:
            frame = cv2.resize(frame, self.frame_size, interpolation=cv2.INTER_NEAREST)

        self.writer.write(cv2.cvtColor(np.ascontiguousarray(frame), cv2.COLOR_RGB2BGR))
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
