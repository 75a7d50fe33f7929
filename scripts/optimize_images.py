"""
Run the optimizer from a source checkout.

Usage:
    python scripts/optimize_images.py -i <input_dir> -o <output_dir> [-w WIDTH] [-H HEIGHT] [-R]

Example:
    python scripts/optimize_images.py -i ./data/photos -o ./data/optimized -w 1280
"""
import sys
from pathlib import Path

# Load environment variables BEFORE settings are read
from dotenv import load_dotenv
load_dotenv()

# Setup path so we can import image_optimizer
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from image_optimizer.cli import main


if __name__ == "__main__":
    sys.exit(main())
