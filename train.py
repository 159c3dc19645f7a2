"""Learn a BPE subword vocabulary and segment a few unseen words."""

import argparse
import logging

from datasets import load_dataset

from subtok import SubwordTokenizer, count_words

# Configure logging to show INFO level and above.
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)

# toy corpus from the fastText / BPE textbook example
TOY_CORPUS = {"fast": 4, "faster": 3, "tall": 5, "taller": 4}


def main() -> None:
    """Train on the toy corpus or a dataset split, then segment sample words."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--merges", type=int, default=10, help="number of merges")
    parser.add_argument(
        "--dataset",
        default=None,
        help="Hugging Face dataset with a 'text' column, e.g. stevez80/Sci-Fi-Books-gutenberg",
    )
    parser.add_argument("--rows", type=int, default=1000, help="dataset rows to use")
    parser.add_argument("--save", default=None, help="file prefix to save the model to")
    parser.add_argument("words", nargs="*", default=["tallest", "fatter"])
    args = parser.parse_args()

    tok = SubwordTokenizer()
    if args.dataset:
        ds = load_dataset(args.dataset, split="train")
        word_freqs = count_words(ds[: args.rows]["text"])
        print(f"number of distinct words {len(word_freqs)}")
        tok.train(word_freqs, args.merges, verbose=True)
    else:
        tok.train(TOY_CORPUS, args.merges, verbose=True)
        print(tok.table.joined())

    print(f"vocabulary size {tok.vocab_size()}")
    for word, symbols in zip(args.words, tok.segment_batch(args.words)):
        print(f"{word}: {' '.join(symbols)}")

    if args.save:
        tok.save(args.save)


if __name__ == "__main__":
    main()
