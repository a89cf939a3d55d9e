import os
import sys
import time
from collections import deque
from datetime import datetime
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from hprof.report import TreeReport

try:
    from torch.utils.tensorboard import SummaryWriter
except ImportError:
    SummaryWriter = None  # type: ignore[misc, assignment]


class Logger:
    """
    Sink for per-frame timing reports: TensorBoard scalars, optional CSV and stdout tables.

    Args:
        run_name (str): Unique identifier for the run. Defaults to current timestamp.
        runs_root (str): Root directory for storing logs. Defaults to $RUNS_DIR or 'runs'.
        label (str): Profiler root label, used in directory structure. Defaults to 'main loop'.
        save_csv (bool): Whether to log timings to a CSV file. Defaults to False.
        use_tensorboard (bool): Whether to write TensorBoard event files. Defaults to True.
        config (dict): Configuration dictionary to log. Defaults to None.
    """
    def __init__(
        self,
        run_name: Optional[str] = None,
        runs_root: Optional[str] = None,
        label: str = "main loop",
        save_csv: bool = False,
        use_tensorboard: bool = True,
        config: Optional[Dict[str, Any]] = None,
    ):
        # resolve the root once per instantiation
        if runs_root is None:
            runs_root = os.getenv("RUNS_DIR", "runs")
        if run_name is None:
            run_name = datetime.now().strftime("%Y-%m-%d_%H%M%S")

        self.run_name = run_name
        self.dir_name = os.path.join(runs_root, label.replace(" ", "_"), run_name)
        os.makedirs(self.dir_name, exist_ok=True)
        self.writer = None
        if use_tensorboard and SummaryWriter is not None:
            self.writer = SummaryWriter(self.dir_name)
        self.name_to_values = {}  # Stores deque of recent values for smoothing
        self.current_step = 0
        self.frames_logged = 0
        self.start_time = time.time()
        self.last_csv_save = time.time()
        self.save_csv = save_csv
        self.save_every = 10 * 60  # Save CSV every 10 minutes

        if self.save_csv:
            self._data = {}  # {step: {key: val, ...}, ...} for CSV logging

        if config is not None:
            self.log_all_hyperparameters(config)

    def log_all_hyperparameters(self, hyperparams: dict):
        """Log the run configuration to TensorBoard and print it to stdout."""
        self.add_hyperparams(hyperparams)
        self.log_hyperparameters(hyperparams)

    def add_hyperparams(self, hyperparams: dict):
        """Log the run configuration to TensorBoard."""
        if self.writer is None:
            return
        self.writer.add_text(
            "hyperparameters",
            "|param|value|\n|-|-|\n%s"
            % ("\n".join([f"|{key}|{value}|" for key, value in hyperparams.items()])),
        )

    def log_hyperparameters(self, hyperparams: dict):
        """Pretty print the run configuration in a table format."""
        param_space, value_space = 30, 40
        format_str = "| {:<" + f"{param_space}" + "} | {:<" + f"{value_space}" + "}|"
        hbar = "-" * (param_space + value_space + 6)

        print(hbar)
        print(format_str.format("Setting", "Value"))
        print(hbar)

        for key, value in hyperparams.items():
            print(format_str.format(str(key), truncate_str(str(value), value_space)))

        print(hbar)

    def add_run_command(self):
        """Log the terminal command used to start the run."""
        cmd = " ".join(sys.argv)
        if self.writer is not None:
            self.writer.add_text("terminal", cmd)
        with open(os.path.join(self.dir_name, "cmd.txt"), "w") as f:
            f.write(cmd)

    def log_frame(self, report: TreeReport, step: int, print_to_stdout: bool = False):
        """
        Log one frame report: total frame time plus duration and share of every region.

        Args:
            report (TreeReport): Report of a completed frame
            step (int): Frame number used as the x-axis
            print_to_stdout (bool): Print the smoothed values afterwards. Defaults to False.
        """
        self.add_scalar("timing/frame_ms", report.total_ns / 1e6, step)
        for record in report.to_records():
            self.add_scalar(f"timing/{record['path']}/duration_ms", record["duration_ns"] / 1e6, step)
            self.add_scalar(f"timing/{record['path']}/percent", record["percentage"], step)
        self.frames_logged += 1
        if print_to_stdout: self.log_stdout()

    def add_scalar(self, key: str, val: float, step: int, smoothing: bool = True):
        """
        Log a scalar value to TensorBoard and optionally to CSV.

        Args:
            key (str): Metric name (e.g., 'timing/physics/duration_ms')
            val (float): Value to log
            step (int): Current frame
            smoothing (bool): Whether to smooth values for stdout logging. Defaults to True.
        """
        if self.writer is not None:
            self.writer.add_scalar(key, val, step)

        # Update smoothing deque
        if key not in self.name_to_values:
            self.name_to_values[key] = deque(maxlen=5 if smoothing else 1)
        self.name_to_values[key].append(val)
        self.current_step = max(self.current_step, step)

        # Log to CSV if enabled
        if self.save_csv:
            if step not in self._data:
                self._data[step] = {}
            self._data[step][key] = val  # Store raw value

            # Periodically save CSV
            if time.time() - self.last_csv_save > self.save_every:
                self.save2csv()
                self.last_csv_save = time.time()

    def save2csv(self, file_name: Optional[str] = None):
        """Save logged data to a CSV file."""
        if not self.save_csv or not self._data:
            return

        if file_name is None:
            file_name = os.path.join(self.dir_name, "progress.csv")

        # Convert to DataFrame
        steps = sorted(self._data.keys())
        rows = []
        for step in steps:
            row = {'global_step': step}
            row.update(self._data[step])
            rows.append(row)
        df = pd.DataFrame(rows)

        # Ensure 'global_step' is first column
        cols = ['global_step'] + [c for c in df.columns if c != 'global_step']
        df = df[cols]

        df.to_csv(file_name, index=False)

    def close(self):
        """Close the TensorBoard writer and save CSV."""
        if self.writer is not None:
            self.writer.close()
        if self.save_csv:
            try:
                self.save2csv()
            except OSError as e:
                print(f"Warning: failed to save timings to {self.dir_name}: {e}")

    def log_stdout(self):
        """Print smoothed timings to stdout."""
        results = {k: np.mean(v) for k, v in self.name_to_values.items()}
        results['step'] = self.current_step
        results['fps'] = self.fps()
        pprint(results)

    def fps(self) -> int:
        """Calculate logged frames per second of wall time."""
        elapsed = time.time() - self.start_time
        return int(self.frames_logged / elapsed) if elapsed > 0 else 0


def pprint(dict_data):
    """Pretty print metrics in a table format."""
    key_space, val_space = 40, 40
    border = "-" * (key_space + val_space + 5)
    row_fmt = f"| {{:<{key_space}}} | {{:<{val_space}}}|"

    print(f"\n{border}")
    for k, v in dict_data.items():
        k_str = truncate_str(str(k), key_space)
        v_str = truncate_str(str(v), val_space)
        print(row_fmt.format(k_str, v_str))
    print(f"{border}\n")


def truncate_str(s: str, max_len: int) -> str:
    """Truncate string with ellipsis if exceeds max length."""
    return s if len(s) <= max_len else s[:max_len-3] + "..."
