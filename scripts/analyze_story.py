import argparse
import asyncio
import mimetypes
from pathlib import Path

import httpx

from love_odds.client.analysis_client import AnalysisClient, StorySession
from love_odds.core.models.input import AudioStory

BASE_URL = "http://localhost:8000"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Send a how-we-met story to the analysis API and print the odds."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Story text")
    source.add_argument("--audio", type=Path, help="Recorded story (webm, mp3, wav...)")
    parser.add_argument("--base-url", default=BASE_URL)
    return parser.parse_args()


async def run(args: argparse.Namespace) -> int:
    async with httpx.AsyncClient(base_url=args.base_url) as http_client:
        session = StorySession(AnalysisClient(http_client))

        print("🔹 Analyzing your story...")
        if args.text:
            session.draft.write(args.text)
            await session.analyze_text()
        else:
            mime_type = mimetypes.guess_type(args.audio.name)[0] or "audio/webm"
            story = AudioStory(data=args.audio.read_bytes(), mime_type=mime_type)
            await session.submit(story, "Failed to analyze audio")

        if session.error:
            print(f"❌ {session.error}")
            return 1

        print(f"\n[Transcription]: {session.transcription}\n")
        print(session.renderer().render_text(expand_all=True))
        return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(run(parse_args())))
