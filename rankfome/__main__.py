# rankfome/__main__.py
"""`python -m rankfome` sobe a API com uvicorn."""
import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "rankfome.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
