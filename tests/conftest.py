# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Shared fixtures: naive-ui shaped sources and session builders.
"""

import json

import pytest

from iconfix.patching import Mode, configure_session, reset_session

REPLACEABLE_ID = "/proj/node_modules/naive-ui/es/_internal/icons/replaceable.mjs"
CHECKBOX_ID = "/proj/node_modules/naive-ui/es/checkbox/src/Checkbox.mjs"
AGGREGATE_ID = "/proj/node_modules/.vite/deps/naive-ui.js"

REPLACEABLE_SRC = """import { defineComponent } from 'vue';
import { useConfig } from "../../../_mixins/index.mjs";
export function replaceable(name, icon) {
  const IconComponent = defineComponent({
    setup() {
      const {
        mergedIconsRef
      } = useConfig(null);
      return () => {
        var _a;
        const iconOverride = (_a = mergedIconsRef === null || mergedIconsRef === void 0 ? void 0 : mergedIconsRef.value) === null || _a === void 0 ? void 0 : _a[name];
        return iconOverride ? iconOverride() : icon;
      };
    }
  });
  return IconComponent;
}
"""

CHECKBOX_SRC = """import { h, defineComponent } from 'vue';
import CheckMark from "./CheckMark.mjs";
import LineMark from "./LineMark.mjs";
export default defineComponent({
  name: 'Checkbox',
  setup(props) {
    return { mergedClsPrefix: props.clsPrefix };
  },
  render() {
    const { mergedClsPrefix } = this;
    return h("div", { class: `${mergedClsPrefix}-checkbox-box` }, CheckMark, LineMark);
  }
});
"""

BACKTOP_ID = "/proj/node_modules/naive-ui/es/back-top/src/BackTop.mjs"
BACKTOP_SRC = """import { h, defineComponent, Transition } from 'vue';
import BackTopIcon from "./BackTopIcon.mjs";
export default defineComponent({
  name: 'BackTop',
  inheritAttrs: false,
  render() {
    const { mergedClsPrefix } = this;
    return h(Transition, { name: "fade-in-scale-up-transition" }, {
      default: () => h("div", { class: `${mergedClsPrefix}-back-top` }, BackTopIcon)
    });
  }
});
"""

RATE_ID = "/proj/node_modules/naive-ui/es/rate/src/Rate.mjs"
RATE_SRC = """import { h, defineComponent } from 'vue';
import StarIcon from './StarIcon.mjs';
export default defineComponent({
  name: 'Rate',
  render() {
    const { mergedClsPrefix, count } = this;
    return h("div", { class: `${mergedClsPrefix}-rate` }, Array.from({ length: count }, () => StarIcon));
  }
});
"""

RESULT_SRC = """import { h, defineComponent } from 'vue';
import image403 from "./403.mjs";
import image404 from "./404.mjs";
const iconRenderMap = {
  403: () => image403,
  404: () => image404,
};
export default defineComponent({
  name: 'Result',
  render() {
    return h("div", { class: "n-result-icon" }, iconRenderMap[this.status]());
  }
});
"""

AGGREGATE_SRC = """// node_modules/naive-ui/es/_internal/icons/replaceable.mjs
function replaceable(name, icon) {
  const IconComponent = defineComponent({
    setup() {
      const {
        mergedIconsRef
      } = useConfig(null);
      return () => {
        return mergedIconsRef.value?.[name] ? mergedIconsRef.value[name]() : icon;
      };
    }
  });
  return IconComponent;
}

// node_modules/naive-ui/es/checkbox/src/CheckMark.mjs
var CheckMark_default = h("svg", { viewBox: "0 0 64 64", class: "check-icon" }, h("path", { d: "M50.42,16.76L22.34,39.45l-8.1-11.46" }));

// node_modules/naive-ui/es/checkbox/src/LineMark.mjs
var LineMark_default = h("svg", { viewBox: "0 0 100 100", class: "line-icon" }, h("path", { d: "M10,50 L90,50" }));

// node_modules/naive-ui/es/checkbox/src/Checkbox.mjs
var Checkbox_default = defineComponent({
  name: "Checkbox",
  render() {
    return h("div", { class: "n-checkbox-box" }, CheckMark_default, LineMark_default);
  }
});
"""

RATE_ONLY_AGGREGATE_SRC = """// node_modules/naive-ui/es/rate/src/StarIcon.mjs
var StarIcon_default = h("svg", { viewBox: "0 0 512 512" }, h("path", { d: "M394 480a16 16 0 01-9.39-3L256 383.76 127.39 477a16 16 0 01-24.55-18.08L153 310.35 23 221.2a16 16 0 019-29.2h160.38l48.4-148.95a16 16 0 0130.44 0l48.4 149H480a16 16 0 019.05 29.2L359 310.35l50.13 148.53A16 16 0 01394 480z" }));

// node_modules/naive-ui/es/rate/src/Rate.mjs
var Rate_default = defineComponent({
  name: "Rate",
  render() {
    return h("div", { class: "n-rate" }, StarIcon_default);
  }
});
"""


def write_manifest(root, version):
    """Install a fake naive-ui package.json under *root*."""
    pkg_dir = root / "node_modules" / "naive-ui"
    pkg_dir.mkdir(parents=True, exist_ok=True)
    (pkg_dir / "package.json").write_text(json.dumps({"name": "naive-ui", "version": version}))
    return pkg_dir / "package.json"


@pytest.fixture
def build_session(tmp_path):
    """Build-mode session with no resolvable naive-ui (fails open)."""
    return configure_session(str(tmp_path), Mode.BUILD)


@pytest.fixture
def serve_session(tmp_path):
    """Serve-mode session with no resolvable naive-ui (fails open)."""
    return configure_session(str(tmp_path), Mode.SERVE)


@pytest.fixture(autouse=True)
def _reset_session_after_test():
    yield
    reset_session()
