# External imports
import argparse
from joblib import Parallel, delayed
import os
from pathlib import Path
import time
import yaml


# Internal imports
from configuration import Configuration
from games.game import GameState
from processors.processor import Processor


# Replays one game file and saves its stat tables.
#
# Input:
#  - config (Configuration)
#  - path (str): yaml game file
#  - write_back (bool): rewrite the game file with normalized positions
#
# Output:
#  game id
def process_game_file(config, path, write_back=False):
    game = GameState.load(path, config)
    proc = Processor(config)
    result = proc.process_game(game)
    game.save(config.output_path, result)
    if write_back:
        game.dump(path)
    return game.id


def find_game_files(input_path):
    return sorted(str(p) for p in Path(input_path).glob('*.yaml'))


def main(argv=None):
    # Parse input arguments
    parser = argparse.ArgumentParser()
    parser.add_argument('config')
    parser.add_argument('-g', '--game')
    parser.add_argument('-j', '--jobs', default=1)
    parser.add_argument('--write-back', action='store_true')
    args = parser.parse_args(argv)

    # Get config
    if not os.path.exists(args.config):
        raise Exception(f'Config file {args.config} not found.')
    with open(args.config, 'r') as yamlfile:
        config = yaml.load(yamlfile, Loader=yaml.FullLoader)
    if not isinstance(config, Configuration):
        raise Exception(f'{args.config} is not a !Config document.')

    start = time.time()
    # If an individual game is specified in the command line, then process it.
    if args.game:
        print(f'PROCESSING {args.game}')
        process_game_file(config, args.game, args.write_back)
    # Else, process every game in the input path.
    else:
        files = find_game_files(config.input_path)
        if not files:
            print(f'Warning: no game files found in {config.input_path}')
        # Define wrapper function to log the parallel execution
        def proc_wrapper(config, path):
            print(f'PROCESSING {path}')
            return process_game_file(config, path, args.write_back)
        # Launch parallel jobs, one processor per game
        Parallel(n_jobs=int(args.jobs))(delayed(proc_wrapper)(config, path) for path in files)

    print(f'--> Execution time: {time.time() - start}')


if __name__ == '__main__':
    main()
