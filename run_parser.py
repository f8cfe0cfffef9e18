"""Parse one resume file with the configured tiers. Use: python run_parser.py resume.pdf"""
import argparse
import json
import sys
from pathlib import Path

from internship_sniper import UploadedDocument, load_pipeline_config, run_resume_pipeline_sync


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Extract structured resume data from a file.")
    parser.add_argument("path", help="PDF, image, DOCX or .txt resume")
    parser.add_argument("--media-type", default="", help="Override the media type inferred from the extension")
    args = parser.parse_args(argv)

    path = Path(args.path)
    if not path.is_file():
        print(f"File not found: {path}", file=sys.stderr)
        return 1
    document = UploadedDocument.from_upload(path.read_bytes(), filename=path.name, media_type=args.media_type)
    record = run_resume_pipeline_sync(document, load_pipeline_config())
    print(json.dumps(record.to_payload(), indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
