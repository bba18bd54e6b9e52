import argparse
import sys

from markov_project.utils.debugg_utils import Colors
from markov_project.utils.file_manager import ChainFormatError
from markov_project.models.configs.configs import MarkovConfig
from markov_project.pipeline import Markov_Pipeline


def build_parser():
    parser = argparse.ArgumentParser(
        description="Train a word-level Markov chain and continue text with it."
    )
    sub = parser.add_subparsers(dest="mode", required=True)

    # shared knobs
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-i",
        "--input",
        nargs="+",  # multi-args after arg
        default=None,
        help="training text file(s)",
    )
    common.add_argument(
        "-c", "--context_len", type=int, default=2, help="words of context (prefix length)"
    )
    common.add_argument(
        "--model_file", type=str, default=None, help="explicit JSON chain path"
    )
    common.add_argument(
        "--root", type=str, default=None, help="project root for experiments/ output"
    )
    common.add_argument("--debug", action="store_true", help="print resource usage")

    train = sub.add_parser("train", parents=[common], help="build and save a chain")
    train.add_argument(
        "-t", "--force_retrain", action="store_true", help="retrain even if a chain is saved"
    )

    gen = sub.add_parser("generate", parents=[common], help="continue a prompt")
    gen.add_argument(
        "-p",
        "--prompt",
        type=str,
        nargs="*",
        default=[],
        help="the starting prompt for gen",
    )
    gen.add_argument("-s", "--sentences", type=int, default=1, help="sentences to generate")
    gen.add_argument("-w", "--max_words", type=int, default=100, help="max generated words")
    gen.add_argument("--seed", type=int, default=None, help="random seed")
    gen.add_argument("--stats", action="store_true", help="print tail usage histogram")
    gen.add_argument("--plot_stats", action="store_true", help="save tail usage bar chart")
    return parser


def main(argv=None):
    """Main function to orchestrate chain training and text generation."""
    args = build_parser().parse_args(argv)

    try:
        config = MarkovConfig(
            context_len=args.context_len,
            sentences=getattr(args, "sentences", 1),
            max_words=getattr(args, "max_words", 100),
            seed=getattr(args, "seed", None),
        )
        if args.debug:
            config.display()
        pipe = Markov_Pipeline(
            config,
            model_file=args.model_file,
            project_root=args.root,
            enable_debug=args.debug,
        )

        if args.mode == "train":
            if not args.input:
                raise ValueError("--input is required for training")
            pipe.train(corpus_paths=args.input, force_retrain=args.force_retrain)
            return 0

        # generate: reuse a saved chain, otherwise train one first
        if pipe.has_pretrained():
            pipe.load_pretrained()
        else:
            pipe.train(corpus_paths=args.input)

        prompt = " ".join(args.prompt)
        out_text = pipe.generate(prompt)
        print("\n=== Generated Text ===\n")
        print(out_text)
        if args.stats or args.plot_stats:
            pipe.report_stats(plot=args.plot_stats)
        return 0

    except (OSError, ValueError) as e:
        kind = "Invalid chain file" if isinstance(e, ChainFormatError) else "Error"
        print(f"{Colors.FAIL}[FAIL]{Colors.ENDC} {kind}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
