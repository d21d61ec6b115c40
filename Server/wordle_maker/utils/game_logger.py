"""
Game Logger Module for Wordle Maker

Writes one JSON object per line for every request, puzzle lifecycle event
and failure. Secret words and raw puzzle tokens never reach the log files:
tokens are reduced to their length and game states to their progress.
"""

import logging
import json
from collections import Counter
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from ..config.app_config import Config
from .helpers import get_user_identity

# Response keys that would let a log reader open or replay a puzzle
MASKED_KEYS = ('token', 'share_url')

STAT_BUCKETS = {
    'USER_ACTION': 'user_actions',
    'SERVER_RESPONSE_SUCCESS': 'server_responses',
    'SERVER_RESPONSE_ERROR': 'server_responses',
    'GAME_EVENT': 'game_events',
    'ERROR': 'errors',
}


class GameLogger:
    """
    Structured log of the puzzle server.

    Entries carry an event type (USER_ACTION, SERVER_RESPONSE_SUCCESS,
    SERVER_RESPONSE_ERROR, GAME_EVENT, ERROR), the action name, the
    caller's IP and free-form details. INFO and up go to a dated file,
    WARNING and up also to the console.
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = getattr(logging, str(level).upper(), logging.INFO)
        self.logger = self._setup_logger()

    def _log_file(self) -> Path:
        return self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def _setup_logger(self) -> logging.Logger:
        logger = logging.getLogger('wordle_maker')
        logger.setLevel(self.level)

        # create_app() may run more than once per process (tests)
        if logger.handlers:
            logger.handlers.clear()

        file_handler = logging.FileHandler(self._log_file(), encoding='utf-8')
        file_handler.setLevel(self.level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)
        return logger

    def _write(self, event_type: str, action: str, user: Dict[str, str],
               details: Dict[str, Any], level: int = logging.INFO) -> None:
        entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user,
            'details': details
        }
        self.logger.log(level, json.dumps(entry, ensure_ascii=False, default=str))

    def log_user_action(self, request, action: str, game_id: Optional[str] = None, **kwargs):
        """
        Record an incoming puzzle or gameplay request.

        Args:
            request: Flask request (or any object with remote_addr)
            action: e.g. 'create_puzzle', 'load_puzzle', 'press_key', 'submit_guess'
            game_id: Session the request targets, if any
            **kwargs: Non-secret request facts such as word_length or key
        """
        details = {
            'game_id': game_id,
            'endpoint': getattr(request, 'endpoint', None),
            'method': getattr(request, 'method', None),
            'path': getattr(request, 'path', None),
            **kwargs
        }
        self._write('USER_ACTION', action, get_user_identity(request), details)

    def log_server_response(self, request, action: str, success: bool,
                            response_data: Dict[str, Any], game_id: Optional[str] = None, **kwargs):
        """Record what a request answered, with tokens and solutions masked. Failures log at ERROR."""
        details = {
            'game_id': game_id,
            'success': success,
            'response_data': self.mask_response(response_data),
            **kwargs
        }
        self._write(
            'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR',
            action, get_user_identity(request), details,
            logging.INFO if success else logging.ERROR
        )

    def log_game_event(self, game_id: Optional[str], event: str, user_ip: Optional[str], **kwargs):
        """
        Record a puzzle lifecycle event.

        Events: puzzle_created, puzzle_loaded, puzzle_decode_failed (with the
        internal failure_kind), game_won, game_lost.
        """
        self._write('GAME_EVENT', event, {'user_ip': user_ip or 'unknown'}, {'game_id': game_id, **kwargs})

    def log_error(self, request, error: Exception, action: str, game_id: Optional[str] = None):
        """Record an unexpected exception caught at a controller boundary."""
        details = {
            'game_id': game_id,
            'error_type': type(error).__name__,
            'error_message': str(error)
        }
        self._write('ERROR', action, get_user_identity(request), details, logging.ERROR)

    @staticmethod
    def mask_response(data: Dict[str, Any]) -> Dict[str, Any]:
        """Copy of a response payload that is safe to log."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        masked = data.copy()
        for key in MASKED_KEYS:
            if masked.get(key):
                masked[key] = f"<{len(masked[key])} chars>"

        state = masked.get('state')
        if isinstance(state, dict):
            masked['state'] = {
                'status': state.get('status'),
                'word_length': state.get('word_length'),
                'max_guesses': state.get('max_guesses'),
                'guesses_count': len(state.get('guesses', [])),
                'answer_revealed': state.get('answer') is not None
            }
        return masked

    def get_log_stats(self) -> Dict[str, Any]:
        """Counts of today's entries per event family, for the health endpoint."""
        log_file = self._log_file()
        if not log_file.exists():
            return {'error': 'No log file found for today'}

        counts = Counter()
        try:
            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    _, _, message = line.rstrip('\n').partition(' | ')
                    _, _, message = message.partition(' | ')
                    if not message:
                        continue
                    counts['total_entries'] += 1
                    try:
                        event_type = json.loads(message).get('event_type')
                    except (ValueError, AttributeError):
                        continue
                    if event_type in STAT_BUCKETS:
                        counts[STAT_BUCKETS[event_type]] += 1
        except OSError as e:
            return {'error': f'Failed to get stats: {e}'}

        return {
            'log_file': str(log_file),
            'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
            'total_entries': counts['total_entries'],
            **{bucket: counts[bucket] for bucket in sorted(set(STAT_BUCKETS.values()))}
        }


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
