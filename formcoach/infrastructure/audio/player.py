import asyncio
import logging
import os
import signal
import tempfile
from typing import List, Optional

logger = logging.getLogger(__name__)


class PlaybackError(Exception):
    """오디오 재생 명령 실패"""


class SubprocessAudioPlayer:
    """wav payload를 임시 파일로 쓰고 플랫폼 재생 명령(aplay/afplay)으로 재생"""

    def __init__(self, command: Optional[List[str]] = None):
        """
        Args:
            command: 재생 명령 (파일 경로가 마지막 인자로 붙음, 예: ["aplay", "-q"])
        """
        self.command = list(command or ["aplay", "-q"])

    async def play(self, audio: bytes) -> None:
        """
        재생이 끝날 때까지 대기. 취소되면 재생 프로세스 그룹 전체를 kill 한다.

        Raises:
            PlaybackError: 명령 실행 실패 / 0이 아닌 종료 코드
        """
        fd, path = tempfile.mkstemp(suffix=".wav", prefix="formcoach_")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(audio)

            try:
                # 별도 session: shell wrapper가 띄운 자식까지 한 번에 종료
                proc = await asyncio.create_subprocess_exec(
                    *self.command, path,
                    stdout=asyncio.subprocess.DEVNULL,
                    stderr=asyncio.subprocess.PIPE,
                    start_new_session=True,
                )
            except OSError as e:
                raise PlaybackError(f"cannot start {self.command[0]}: {e}") from e

            try:
                _, stderr = await proc.communicate()
            except asyncio.CancelledError:
                if proc.returncode is None:
                    _kill_group(proc)
                    await proc.wait()
                raise

            if proc.returncode != 0:
                detail = (stderr or b"").decode(errors="replace").strip()
                raise PlaybackError(f"{self.command[0]} exited {proc.returncode}: {detail}")
        finally:
            try:
                os.remove(path)
            except OSError:
                logger.debug(f"temp audio already removed: {path}")


def _kill_group(proc: asyncio.subprocess.Process) -> None:
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        logger.debug(f"player process group already gone: {proc.pid}")
    except PermissionError:
        proc.kill()
