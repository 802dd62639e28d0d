# run_pipeline.py
import argparse
import asyncio
import sys
from pathlib import Path

# Make the repo root importable (same as the API entry point)
repo_root = Path(__file__).resolve().parent
if str(repo_root) not in sys.path:
    sys.path.append(str(repo_root))

from core.config import get_settings
from core.exceptions import ReferentException
from models.request import ArticleRequest
from services.pipeline import ArticlePipeline

TASKS = ("parse", "summary", "thesis", "telegram", "translate", "illustration")


async def main(task: str, url: str, image_out: Path) -> int:
    pipeline = ArticlePipeline.from_settings(get_settings())
    request = ArticleRequest(url=url)
    try:
        if task == "parse":
            article = await pipeline.load_article(request)
            print(f"Title : {article.title}")
            print(f"Date  : {article.date}")
            print(f"Method: {article.strategy}\n")
            print(article.content)
        elif task == "illustration":
            prompt, image = await pipeline.illustrate(request)
            image_out.write_bytes(image.content)
            print(f"Prompt: {prompt}")
            print(f"Image written to {image_out} ({image.media_type})")
        else:
            runners = {
                "summary": pipeline.summarize,
                "thesis": pipeline.extract_thesis,
                "telegram": pipeline.telegram_post,
                "translate": pipeline.translate,
            }
            print(await runners[task](request))
    except ReferentException as exc:
        print(f"{exc.code}: {exc.message}", file=sys.stderr)
        return 1
    finally:
        await pipeline.aclose()
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run one article task from the shell.")
    parser.add_argument("task", choices=TASKS)
    parser.add_argument("url")
    parser.add_argument("--image-out", type=Path, default=Path("illustration.png"))
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.task, args.url, args.image_out)))
