"""
Contract Deployment Wrapper
Runs scripts/deploy_contract.py
"""

import os
import subprocess
import sys

ROOT = os.path.dirname(os.path.abspath(__file__))

if __name__ == "__main__":
    print("=" * 70)
    print("Voting Contract Deployment")
    print("=" * 70)
    print()

    env = dict(os.environ)
    env['PYTHONPATH'] = os.pathsep.join(filter(None, [ROOT, env.get('PYTHONPATH')]))

    # Run deployment script
    result = subprocess.run(
        [sys.executable, os.path.join("scripts", "deploy_contract.py")],
        cwd=ROOT,
        env=env
    )

    sys.exit(result.returncode)
