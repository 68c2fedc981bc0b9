# runlog.py
import os, datetime

OUTPUT_DIR = os.environ.get("TODOIST_STATS_OUTPUT", "output")
RUN_LOG    = os.path.join(OUTPUT_DIR, "run.log")

def log(msg: str):
    ts = datetime.datetime.now(datetime.timezone.utc).strftime("%Y-%m-%d %H:%M:%SZ")
    line = f"[{ts}] {msg}"
    print(line)
    try:
        os.makedirs(os.path.dirname(RUN_LOG) or ".", exist_ok=True)
        with open(RUN_LOG, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError:
        pass
