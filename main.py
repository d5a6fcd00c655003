# main.py
"""
Entry point for running the pipeline from a checkout: `python main.py`.
The installed console script `food-dataset` calls the same function.
"""

from food_dataset.cli import main


if __name__ == "__main__":
    main()
