import json
import sys
from collections import Counter
from pathlib import Path

# Find latest survival log
log_dir = Path("logs/telemetry")
survival_logs = sorted(log_dir.glob("survival_*.jsonl"))

if not survival_logs:
    sys.stdout.write("No survival logs found\n")
    sys.exit(0)

latest_log = survival_logs[-1]
sys.stdout.write(f"Analyzing: {latest_log.name}\n")
sys.stdout.write("=" * 80 + "\n\n")

samples = []
with open(latest_log, 'r', encoding='utf-8') as f:
    for line in f:
        line = line.strip()
        if line:
            try:
                samples.append(json.loads(line))
            except json.JSONDecodeError:
                sys.stdout.write(f"Skipping malformed line: {line[:40]}\n")

if not samples:
    sys.stdout.write("No valid samples found\n")
    sys.exit(0)

first, last = samples[0], samples[-1]
sys.stdout.write(f"TOTAL SAMPLES: {len(samples)}\n")
sys.stdout.write(f"Time range: minute {first['minute']} to {last['minute']}\n")
duration = last['minute'] - first['minute']
sys.stdout.write(f"Duration: {duration} minutes (~{duration/60:.1f}h)\n\n")

sys.stdout.write("VITALS:\n")
for key, unit in (("temperature", "°F"), ("calories", "kcal"), ("hydration", "ml"), ("energy", "min")):
    values = [s[key] for s in samples]
    sys.stdout.write(
        f"  {key:12s}: start {first[key]:8.1f} end {last[key]:8.1f} "
        f"min {min(values):8.1f} max {max(values):8.1f} {unit}\n"
    )
sys.stdout.write(f"  {'health':12s}: start {first['health_percent']:8.1%} end {last['health_percent']:8.1%}\n")
sys.stdout.write(f"  {'weight':12s}: start {first['weight']:8.2f} end {last['weight']:8.2f} kg\n")

# Effects
effect_minutes = Counter()
peak_severity = {}
for sample in samples:
    for label, severity in sample['effects'].items():
        effect_minutes[label] += 1
        peak_severity[label] = max(peak_severity.get(label, 0.0), severity)

if effect_minutes:
    sys.stdout.write(f"\n{'='*80}\n")
    sys.stdout.write(f"EFFECTS ({len(effect_minutes)} kinds)\n")
    sys.stdout.write(f"{'='*80}\n\n")
    for label, count in effect_minutes.most_common():
        pct = (count / len(samples)) * 100
        sys.stdout.write(f"  {label:25s}: {count:5d} samples ({pct:5.1f}%), peak {peak_severity[label]:.2f}\n")

# Damage
damage_logs = sorted(log_dir.glob("damage_*.jsonl"))
if damage_logs:
    hits = []
    with open(damage_logs[-1], 'r', encoding='utf-8') as f:
        hits = [json.loads(line) for line in f if line.strip()]
    if hits:
        sys.stdout.write(f"\n{'='*80}\n")
        sys.stdout.write(f"DAMAGE ({len(hits)} hits)\n")
        sys.stdout.write(f"{'='*80}\n\n")
        by_source = Counter()
        for hit in hits:
            by_source[(hit['source'], hit['target'])] += hit['amount']
        for (source, target), amount in by_source.most_common():
            sys.stdout.write(f"  {source:15s} -> {str(target):15s}: {amount:.2f}\n")

sys.stdout.write(f"\n{'='*80}\n")
sys.stdout.write("ANALYSIS COMPLETE\n")
sys.stdout.write(f"{'='*80}\n")
